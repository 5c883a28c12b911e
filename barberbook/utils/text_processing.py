# barberbook/utils/text_processing.py
"""Phone number, date and time text helpers"""
import re
from datetime import date, datetime, time
from typing import Union
from urllib.parse import quote

_NON_DIGITS = re.compile(r"\D")

MIN_CONTACT_DIGITS = 10


def digits_only(value: str) -> str:
    """Strip every non-digit character"""
    return _NON_DIGITS.sub("", value or "")


def is_valid_contact(value: str) -> bool:
    """A contact number is usable when it keeps at least 10 digits"""
    return len(digits_only(value)) >= MIN_CONTACT_DIGITS


def format_phone_number(phone: str) -> str:
    """
    Format a Brazilian phone number for display.

    11 digits -> (XX) XXXXX-XXXX, 10 digits -> (XX) XXXX-XXXX,
    anything else is returned unchanged.
    """
    cleaned = digits_only(phone)

    if len(cleaned) == 11:
        return f"({cleaned[:2]}) {cleaned[2:7]}-{cleaned[7:]}"
    elif len(cleaned) == 10:
        return f"({cleaned[:2]}) {cleaned[2:6]}-{cleaned[6:]}"

    return phone


def generate_whatsapp_link(phone: str, text: str) -> str:
    """Build a wa.me deep link that opens a chat prefilled with text"""
    return f"https://wa.me/{digits_only(phone)}?text={quote(text, safe='')}"


def parse_date(value: Union[str, date]) -> date:
    """Parse YYYY-MM-DD (dates pass through)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def parse_time(value: Union[str, time]) -> time:
    """Parse HH:MM or HH:MM:SS 24-hour time (times pass through)"""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    value = value.strip()
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time().replace(second=0)


def format_date_long(value: date) -> str:
    """Human date for customer-facing messages, e.g. Tuesday, 10 June 2025"""
    return value.strftime("%A, %d %B %Y")
