"""Constants for user roles, store status and the date/time formats used by tasks."""

from enum import Enum


class UserRole(str, Enum):
    """Enumeration of user roles."""

    user = "user"
    admin = "admin"


class StoreStatus(str, Enum):
    """Availability of the persistence backend for the current process."""

    available = "available"
    unconfigured = "unconfigured"


# Tasks store due dates and times as plain strings; comparisons are lexical.
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DATE_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

MIN_RATING = 1
MAX_RATING = 5

TASK_REMINDER_TITLE = "Task Reminder"
