# inventory_tracker/utils/validation.py
import re
from typing import Dict, List, Optional

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from inventory_tracker.exceptions import ValidationError, DuplicateNameError

EMAIL_RE = re.compile(r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$")
# Mobile numbers: 09xxxxxxxxx or +639xxxxxxxxx
MOBILE_RE = re.compile(r"^(\+63|0)9\d{9}$")
# Company line: mobile, +63 2 123 4567 landline, or 1800 toll-free
COMPANY_PHONE_RE = re.compile(r"^(((\+63|0)9\d{9})|(\+63 \d \d{3} \d{4})|(1800 \d{2} \d{3} \d{4}))$")

_email_adapter = TypeAdapter(EmailStr)


def trim(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()


def trim_optional(value: Optional[str]) -> Optional[str]:
    """Trim, and turn a blank optional field into None."""
    value = trim(value)
    return value or None


def escape_like(value: str) -> str:
    """Make LIKE wildcards in user input match literally (escape char is a backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def is_email(value: str) -> bool:
    """The address pattern used on supplier forms, plus pydantic's EmailStr check."""
    if not EMAIL_RE.match(value):
        return False
    try:
        _email_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


class ErrorCollector:
    """Collects per-field errors and raises them together, like a form's model state."""

    def __init__(self):
        self.errors: Dict[str, List[str]] = {}
        self._duplicate: Optional[DuplicateNameError] = None

    def add(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def require(self, field: str, value: Optional[str], message: str) -> None:
        if not value:
            self.add(field, message)

    def match(self, field: str, value: Optional[str], pattern, message: str) -> None:
        if value and not pattern.match(value):
            self.add(field, message)

    def email(self, field: str, value: Optional[str], message: str) -> None:
        if value and not is_email(value):
            self.add(field, message)

    def duplicate(self, error: DuplicateNameError) -> None:
        self._duplicate = error
        for field, messages in error.errors.items():
            for message in messages:
                self.add(field, message)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def raise_if_any(self) -> None:
        if not self.errors:
            return
        # A lone duplicate keeps its specific type
        if self._duplicate is not None and self.errors == self._duplicate.errors:
            raise self._duplicate
        raise ValidationError(self.errors)
