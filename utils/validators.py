"""
Validation utilities for the Academic Metrics Engine
"""

from datetime import datetime, date
from decimal import Decimal, ROUND_HALF_UP

from utils.exceptions import ValidationError

def validate_id(value, field_name="id"):
    """Validate a positive integer identifier"""
    if value is None or value == '':
        return False, f"{field_name} is required"

    if isinstance(value, bool):
        return False, f"{field_name} must be an integer"

    try:
        number = int(value)
    except (TypeError, ValueError):
        return False, f"{field_name} must be an integer"

    if isinstance(value, float) and not value.is_integer():
        return False, f"{field_name} must be an integer"

    if number <= 0:
        return False, f"{field_name} must be positive"

    return True, f"Valid {field_name}"

def validate_date(date_value):
    """Validate an ISO date or datetime"""
    if not date_value:
        return False, "Date is required"

    if isinstance(date_value, (date, datetime)):
        return True, "Valid date"

    try:
        datetime.fromisoformat(str(date_value).replace('Z', '+00:00'))
        return True, "Valid date"
    except ValueError:
        return False, "Invalid date format. Use YYYY-MM-DD"

def validate_marks(marks, max_marks=None):
    """Validate marks obtained"""
    if marks is None or marks == '':
        return False, "Marks are required"

    if isinstance(marks, bool):
        return False, "Marks must be a number"

    try:
        marks = float(marks)
    except (TypeError, ValueError):
        return False, "Marks must be a number"

    if marks != marks or marks in (float('inf'), float('-inf')):
        return False, "Marks must be a finite number"

    if marks < 0:
        return False, "Marks cannot be negative"

    if max_marks is not None and marks > max_marks:
        return False, f"Marks cannot exceed maximum marks ({max_marks:g})"

    return True, "Valid marks"

def validate_enum(value, enum_class, field_name="value"):
    """Validate a value against a closed enumeration"""
    if isinstance(value, enum_class):
        return True, f"Valid {field_name}"

    allowed = [member.value for member in enum_class]
    if not isinstance(value, str) or value.upper() not in allowed:
        return False, f"{field_name} must be one of: {', '.join(allowed)}"

    return True, f"Valid {field_name}"

def require_id(value, field_name="id"):
    """Return value as int or raise ValidationError"""
    is_valid, message = validate_id(value, field_name)
    if not is_valid:
        raise ValidationError(message)
    return int(value)

def optional_id(value, field_name="id"):
    if value is None or value == '':
        return None
    return require_id(value, field_name)

def parse_day(date_value):
    """Normalize a date/datetime/ISO string to a calendar day"""
    is_valid, message = validate_date(date_value)
    if not is_valid:
        raise ValidationError(message)

    if isinstance(date_value, datetime):
        return date_value.date()
    if isinstance(date_value, date):
        return date_value
    return datetime.fromisoformat(str(date_value).replace('Z', '+00:00')).date()

def parse_enum(value, enum_class, field_name="value"):
    is_valid, message = validate_enum(value, enum_class, field_name)
    if not is_valid:
        raise ValidationError(message)
    if isinstance(value, enum_class):
        return value
    return enum_class(value.upper())

def round_half_up(value, places=2):
    """Round half away from zero on the decimal representation"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
