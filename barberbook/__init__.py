"""Appointment booking backend for a single-location barbershop."""

__version__ = "0.1.0"
