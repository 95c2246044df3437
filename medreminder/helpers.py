# medreminder/helpers.py
import math
from datetime import date, datetime


class ValidationError(Exception):
    """Raised by controllers and services for a request the client must fix."""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def api_response(success, message, data=None, status_code=200):
    return {
        "success": success,
        "message": message,
        "data": data
    }, status_code


def require_int(value, field, minimum=None, maximum=None):
    """Coerce a JSON/query value to int; bools, fractional and infinite values are rejected."""
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(f"{field} is required")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, float) and value != number:
        raise ValidationError(f"{field} must be an integer")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be >= {minimum}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field} must be <= {maximum}")
    return number


def optional_int(value, field, minimum=None):
    if value is None or value == "":
        return None
    return require_int(value, field, minimum=minimum)


def optional_float(value, field):
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    return number


def optional_date(value, field):
    """Parse ``YYYY-MM-DD`` or a full ISO timestamp; the whole string must be valid."""
    if not value:
        return None
    text = str(value).strip()
    try:
        if len(text) > 10:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")


def clean_str(value):
    return "" if value is None else str(value).strip()
