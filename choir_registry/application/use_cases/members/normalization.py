"""Turn raw submitted member fields into the shape the repository stores.

Form transports deliver a checkbox group as a single string (one box
checked), a list (several boxes) or nothing at all (no box checked). Every
submission goes through :func:`normalize_member_fields` so the repository only
ever sees lists of strings for ``position`` and ``instruments``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from choir_registry.domain.entities import (
    SCALAR_TEXT_FIELDS,
    STRING_SET_FIELDS,
    TEXT_FIELD_MAX_LENGTHS,
)
from choir_registry.domain.errors import ValidationError

WIRE_FIELD_NAMES: dict[str, str] = {
    "fullName": "full_name",
    "gender": "gender",
    "status": "status",
    "part": "part",
    "zone": "zone",
    "area": "area",
    "parish": "parish",
    "parishAddress": "parish_address",
    "residentialAddress": "residential_address",
    "stateOfOrigin": "state_of_origin",
    "homeTown": "home_town",
    "occupation": "occupation",
    "phoneNo": "phone_no",
    "joinYear": "join_year",
    "position": "position",
    "instruments": "instruments",
}
OTHER_INSTRUMENT_FIELDS: tuple[str, ...] = ("otherInstrument", "other_instrument")
OTHER_INSTRUMENT_PLACEHOLDER = "other"

MIN_JOIN_YEAR = 1900
MAX_JOIN_YEAR = 2100

_WIRE_NAME_BY_FIELD: dict[str, str] = {field: wire for wire, field in WIRE_FIELD_NAMES.items()}
_FIELD_LOOKUP: dict[str, str] = {
    **WIRE_FIELD_NAMES,
    **{name: name for name in WIRE_FIELD_NAMES.values()},
}


def normalize_string_set(value: Any, *, field_name: str = "value") -> list[str]:
    """Coerce a scalar, a collection or ``None`` into a list of unique strings."""

    if value is None:
        items: Iterable[Any] = ()
    elif isinstance(value, str):
        items = (value,)
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        raise ValidationError(f"'{field_name}' must be text or a list of text values")

    normalized: dict[str, None] = {}
    for item in items:
        if item is None:
            continue
        if not isinstance(item, str):
            raise ValidationError(f"'{field_name}' must only contain text values")
        cleaned = item.strip()
        if cleaned:
            normalized.setdefault(cleaned, None)
    return list(normalized)


def normalize_text(value: Any) -> str | None:
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else None
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _bounded_text(name: str, value: Any) -> str | None:
    text = normalize_text(value)
    max_length = TEXT_FIELD_MAX_LENGTHS.get(name)
    if text is not None and max_length is not None and len(text) > max_length:
        wire_name = _WIRE_NAME_BY_FIELD.get(name, name)
        raise ValidationError(f"'{wire_name}' must be at most {max_length} characters")
    return text


def normalize_join_year(value: Any) -> int | None:
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else None
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError("joinYear must be a whole number")
    if isinstance(value, int):
        year = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            year = int(text)
        except ValueError as exc:
            raise ValidationError("joinYear must be a whole number") from exc
    if not MIN_JOIN_YEAR <= year <= MAX_JOIN_YEAR:
        raise ValidationError(
            f"joinYear must be between {MIN_JOIN_YEAR} and {MAX_JOIN_YEAR}"
        )
    return year


def _apply_other_instrument(instruments: list[str], other: Any) -> list[str]:
    other_text = normalize_text(other)
    if not other_text:
        return instruments
    replaced = [
        other_text if item.lower() == OTHER_INSTRUMENT_PLACEHOLDER else item
        for item in instruments
    ]
    return list(dict.fromkeys(replaced))


def normalize_member_fields(raw: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
    """Return repository-ready values for the known fields in ``raw``.

    Unknown keys are dropped, which also keeps clients from writing ``photo``,
    ``id`` or the timestamps. With ``partial`` set, only fields present in
    ``raw`` are returned; otherwise every editable field is returned and
    missing checkbox groups become empty lists.
    """

    submitted: dict[str, Any] = {}
    for key, value in raw.items():
        name = _FIELD_LOOKUP.get(key)
        if name is not None:
            submitted[name] = value

    values: dict[str, Any] = {}
    for name in SCALAR_TEXT_FIELDS:
        if name in submitted:
            values[name] = _bounded_text(name, submitted[name])
        elif not partial:
            values[name] = None

    if "join_year" in submitted:
        values["join_year"] = normalize_join_year(submitted["join_year"])
    elif not partial:
        values["join_year"] = None

    for name in STRING_SET_FIELDS:
        if name in submitted:
            values[name] = normalize_string_set(submitted[name], field_name=name)
        elif not partial:
            values[name] = []

    if "instruments" in values:
        other = next(
            (raw[key] for key in OTHER_INSTRUMENT_FIELDS if key in raw), None
        )
        values["instruments"] = _apply_other_instrument(values["instruments"], other)

    return values


__all__ = [
    "WIRE_FIELD_NAMES",
    "normalize_join_year",
    "normalize_member_fields",
    "normalize_string_set",
    "normalize_text",
]
