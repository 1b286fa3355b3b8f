"""Domain entity describing a registered choir member."""

from dataclasses import dataclass, field
from datetime import datetime

SCALAR_TEXT_FIELDS: tuple[str, ...] = (
    "full_name",
    "gender",
    "status",
    "part",
    "zone",
    "area",
    "parish",
    "parish_address",
    "residential_address",
    "state_of_origin",
    "home_town",
    "occupation",
    "phone_no",
)
TEXT_FIELD_MAX_LENGTHS: dict[str, int] = {
    "full_name": 255,
    "gender": 50,
    "status": 50,
    "part": 50,
    "zone": 255,
    "area": 255,
    "parish": 255,
    "parish_address": 500,
    "residential_address": 500,
    "state_of_origin": 100,
    "home_town": 100,
    "occupation": 255,
    "phone_no": 50,
}
STRING_SET_FIELDS: tuple[str, ...] = ("position", "instruments")
EDITABLE_FIELDS: tuple[str, ...] = SCALAR_TEXT_FIELDS + ("join_year",) + STRING_SET_FIELDS


@dataclass
class Member:
    """A choir member record and the name of its photo file, if any."""

    id: str
    full_name: str | None = None
    gender: str | None = None
    status: str | None = None
    part: str | None = None
    zone: str | None = None
    area: str | None = None
    parish: str | None = None
    parish_address: str | None = None
    residential_address: str | None = None
    state_of_origin: str | None = None
    home_town: str | None = None
    occupation: str | None = None
    phone_no: str | None = None
    join_year: int | None = None
    photo: str = ""
    position: list[str] = field(default_factory=list)
    instruments: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "EDITABLE_FIELDS",
    "Member",
    "SCALAR_TEXT_FIELDS",
    "STRING_SET_FIELDS",
    "TEXT_FIELD_MAX_LENGTHS",
]
