# barberbook/schemas/__init__.py
from .booking import (
    BookingRequest,
    BookingConfirmation,
    SlotResponse,
    SlotListResponse,
    CalendarDay,
    CalendarResponse,
)

from .business import (
    SettingsUpdateRequest,
    SettingsResponse,
    DayOffRequest,
)

from .service import (
    ServiceCreate,
    ServiceUpdate,
    ServiceResponse,
    ServiceListResponse,
)

from .appointment import (
    StatusUpdateRequest,
    LoginRequest,
    TokenResponse,
)
