"""
Field predicates shared by the per-entity validators.

Validators in each feature package return the first failure reason as a
string, or None when the payload is acceptable.
"""

from __future__ import annotations

import math
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyUrl, TypeAdapter, ValidationError

_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)

# Ids are PostgreSQL bigint.
MAX_ID = 2**63 - 1


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _exact_int(value: Any) -> int | None:
    # Plain ints and digit strings are compared exactly; floats lose precision near MAX_ID.
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        digits = value.strip()
        if digits.isascii() and digits.isdigit():
            try:
                return int(digits)
            except ValueError:
                # Beyond the interpreter's int-string digit limit.
                return None
    return None


def is_valid_id(value: Any) -> bool:
    """
    An id is valid when it is numeric, greater than zero and fits a bigint.
    """
    exact = _exact_int(value)
    if exact is not None:
        return 0 < exact <= MAX_ID
    number = _as_number(value)
    return number is not None and 0 < number <= MAX_ID


def parse_id(value: Any) -> int | None:
    """
    Return the id as an int, or None when it is not a valid whole id.
    """
    if not is_valid_id(value):
        return None
    exact = _exact_int(value)
    if exact is not None:
        return exact
    number = _as_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, dict, tuple)):
        return len(value) == 0
    return value is False or value == 0


def is_valid_email(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_url(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def text(value: Any) -> str:
    """
    Coerce a scalar field value to text for length checks.
    """
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
