"""
schemas/common.py
-----------------
Shared pydantic base for the JSON API.

Python attributes stay snake_case; the wire format is camelCase
(viewId, orderedIds, totalRooms, ...). populate_by_name lets tests and
services build models with either spelling.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    success: bool = True


def blank_to_none(v):
    """Treat empty / whitespace-only optional strings as missing."""
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


def require_text(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]
RequiredText = Annotated[str, AfterValidator(require_text)]


def to_utc(v: Optional[datetime]) -> Optional[datetime]:
    """Normalise to an aware UTC datetime; naive input is taken as UTC."""
    if v is None:
        return v
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


# SQLite drops the offset on write, so values must already be in UTC
UtcDateTime = Annotated[Optional[datetime], AfterValidator(to_utc)]
