"""Validation utilities for the application."""
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type

from brigade_attendance.utils.errors import BadRequestError

TIME_PATTERN = re.compile(r'^([01]?[0-9]|2[0-3]):[0-5][0-9]$')

class ValidationError(BadRequestError):
    """Custom validation error."""
    pass

class Validator:
    """Validation helper class."""

    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format."""
        if not email:
            return False
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(pattern, email))

    @staticmethod
    def validate_password(password: str, field: str = 'Password') -> None:
        """Validate password strength."""
        if not password:
            raise ValidationError(f"{field} is required")
        if not isinstance(password, str):
            raise ValidationError(f"{field} must be a string")
        if len(password) < 6:
            raise ValidationError(f"{field} must be at least 6 characters")
        if len(password) > 128:
            raise ValidationError(f"{field} is too long")

    @staticmethod
    def missing_fields(data: Dict, required_fields: Iterable[str]) -> List[str]:
        """Return the required fields that are absent or empty."""
        return [
            field for field in required_fields
            if field not in data or data[field] in (None, '', [])
        ]

    @staticmethod
    def require(data: Dict, required_fields: Iterable[str], message: str) -> None:
        """Raise ``message`` unless every required field is present."""
        if Validator.missing_fields(data, required_fields):
            raise ValidationError(message)

    @staticmethod
    def require_str(data: Dict, fields: Iterable[str], message: str) -> None:
        """Like :meth:`require`, but every field must also be a string."""
        Validator.require(data, fields, message)
        if not all(isinstance(data[field], str) for field in fields):
            raise ValidationError(message)

    @staticmethod
    def parse_enum(enum_class: Type[Enum], value: Any, message: str) -> Enum:
        """Resolve an enum member by value, raising ``message`` otherwise."""
        try:
            return enum_class(value)
        except ValueError:
            raise ValidationError(message)

    @staticmethod
    def parse_datetime(value: Any, field: str) -> datetime:
        """Parse an ISO 8601 string into a naive local datetime."""
        if not isinstance(value, str) or not value:
            raise ValidationError(f"Valid {field} is required")
        try:
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError(f"Valid {field} is required")
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
        return parsed

    @staticmethod
    def parse_date(value: Any, field: str = 'date') -> date:
        """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) into a date."""
        if isinstance(value, str) and len(value) == 10:
            try:
                return date.fromisoformat(value)
            except ValueError:
                raise ValidationError(f"Valid {field} is required")
        return Validator.parse_datetime(value, field).date()

    @staticmethod
    def validate_time(value: Any, field: str) -> str:
        """Validate an ``HH:MM`` clock time."""
        if not isinstance(value, str) or not TIME_PATTERN.match(value):
            raise ValidationError(f"Invalid time format for {field}")
        return value

    @staticmethod
    def validate_bool(value: Any, field: str) -> bool:
        if not isinstance(value, bool):
            raise ValidationError(f"{field} must be a boolean")
        return value

    @staticmethod
    def optional_str(value: Any) -> Optional[str]:
        """Strip strings, turning blanks into ``None``."""
        if value is None:
            return None
        value = str(value).strip()
        return value or None
