"""External capabilities used by the notification dispatcher."""

from .base import CalendarProvider, EmailProvider
from .calendar import LoggingCalendarProvider
from .email import LoggingEmailProvider, SendGridEmailProvider

__all__ = [
    "CalendarProvider",
    "EmailProvider",
    "LoggingCalendarProvider",
    "LoggingEmailProvider",
    "SendGridEmailProvider",
]
