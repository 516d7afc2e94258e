from typing import Optional

from pydantic import BaseModel


def check_length(
    value: str,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
    too_short: str = "Too short",
    too_long: str = "Too long",
) -> str:
    """Raise the field's own message for the first bound it breaks."""
    if minimum is not None and len(value) < minimum:
        raise ValueError(too_short)
    if maximum is not None and len(value) > maximum:
        raise ValueError(too_long)
    return value


def strip_or_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def coerce_int(value, message: str):
    """Form inputs arrive as text; empty means zero, decimals truncate."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(message)
    if isinstance(value, str):
        value = value.strip() or "0"
    try:
        return int(float(value))
    except (TypeError, ValueError):
        raise ValueError(message)


class MessageResponse(BaseModel):
    message: str
