"""Persistence helpers for choir member records."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any
from uuid import uuid4

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from choir_registry.domain.entities import (
    EDITABLE_FIELDS,
    SCALAR_TEXT_FIELDS,
    STRING_SET_FIELDS,
    Member,
)
from choir_registry.domain.errors import StorageError, ValidationError
from choir_registry.infrastructure.models import MemberModel
from choir_registry.utils import now_in_app_naive_datetime

SEARCHABLE_FIELDS: tuple[str, ...] = ("full_name", "phone_no", "parish", "zone", "area")


class MemberRepository:
    """Provide CRUD and query operations for member records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, values: Mapping[str, Any], *, photo: str = "") -> Member:
        """Insert a new member built from already normalized ``values``."""

        prepared = self._prepare_values(values)
        for name in STRING_SET_FIELDS:
            prepared.setdefault(name, [])
        model = MemberModel(id=uuid4().hex, photo=photo or "")
        self._apply_values_to_model(model, prepared)
        model.created_at = now_in_app_naive_datetime()
        with self._translate_errors():
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def get(self, member_id: str) -> Member | None:
        with self._translate_errors():
            model = self.session.get(MemberModel, member_id)
        return self._to_entity(model) if model else None

    def update(self, member_id: str, changes: Mapping[str, Any]) -> Member | None:
        """Replace the fields present in ``changes``; return ``None`` if absent."""

        prepared = self._prepare_values(changes)
        with self._translate_errors():
            model = self.session.get(MemberModel, member_id)
            if model is None:
                return None
            self._apply_values_to_model(model, prepared)
            if "photo" in changes:
                model.photo = changes["photo"] or ""
            model.updated_at = now_in_app_naive_datetime()
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, member_id: str) -> bool:
        with self._translate_errors():
            deleted = (
                self.session.query(MemberModel)
                .filter(MemberModel.id == member_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        return bool(deleted)

    def list(self, *, skip: int = 0, limit: int | None = None) -> tuple[list[Member], int]:
        """Return one slice of members, newest first, and the overall count."""

        with self._translate_errors():
            query = self.session.query(MemberModel).order_by(MemberModel.created_at.desc())
            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)
            models = query.all()
            total = self.session.query(func.count(MemberModel.id)).scalar() or 0
        return [self._to_entity(model) for model in models], int(total)

    def list_all(self) -> list[Member]:
        """Return every member sorted by full name."""

        with self._translate_errors():
            models = (
                self.session.query(MemberModel)
                .order_by(MemberModel.full_name.asc(), MemberModel.created_at.asc())
                .all()
            )
        return [self._to_entity(model) for model in models]

    def search(self, term: str, *, limit: int | None = None) -> list[Member]:
        """Case-insensitive substring search over the searchable columns."""

        needle = term.strip().lower()
        with self._translate_errors():
            query = self.session.query(MemberModel)
            if needle:
                query = query.filter(
                    or_(
                        *(
                            getattr(MemberModel, name).icontains(needle, autoescape=True)
                            for name in SEARCHABLE_FIELDS
                        )
                    )
                )
            query = query.order_by(MemberModel.created_at.desc())
            if limit is not None:
                query = query.limit(limit)
            models = query.all()
        return [self._to_entity(model) for model in models]

    def distinct_values(self, field_name: str) -> list[str]:
        """Return the sorted distinct non-blank values stored in ``field_name``."""

        if field_name not in SCALAR_TEXT_FIELDS:
            raise ValidationError(f"Cannot list distinct values of '{field_name}'")
        column = getattr(MemberModel, field_name)
        with self._translate_errors():
            rows = (
                self.session.query(column)
                .filter(column.isnot(None))
                .filter(func.trim(column) != "")
                .distinct()
                .all()
            )
        return sorted({row[0].strip() for row in rows})

    def referenced_photos(self) -> set[str]:
        """Return every photo filename currently referenced by a member."""

        with self._translate_errors():
            rows = (
                self.session.query(MemberModel.photo)
                .filter(MemberModel.photo.isnot(None))
                .filter(MemberModel.photo != "")
                .all()
            )
        return {row[0] for row in rows}

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(f"Member storage failed: {exc}") from exc

    @staticmethod
    def _ensure_string_set(name: str, value: Any) -> list[str]:
        if isinstance(value, (str, bytes)) or not isinstance(
            value, (list, tuple, set, frozenset)
        ):
            raise ValidationError(f"'{name}' must be a collection of strings")
        if not all(isinstance(item, str) for item in value):
            raise ValidationError(f"'{name}' must only contain strings")
        return list(dict.fromkeys(value))

    @classmethod
    def _prepare_values(cls, values: Mapping[str, Any]) -> dict[str, Any]:
        prepared: dict[str, Any] = {}
        for name in EDITABLE_FIELDS:
            if name not in values:
                continue
            value = values[name]
            if name in STRING_SET_FIELDS:
                value = cls._ensure_string_set(name, value)
            prepared[name] = value
        return prepared

    @staticmethod
    def _apply_values_to_model(model: MemberModel, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            setattr(model, name, value)

    @staticmethod
    def _to_entity(model: MemberModel) -> Member:
        return Member(
            id=model.id,
            full_name=model.full_name,
            gender=model.gender,
            status=model.status,
            part=model.part,
            zone=model.zone,
            area=model.area,
            parish=model.parish,
            parish_address=model.parish_address,
            residential_address=model.residential_address,
            state_of_origin=model.state_of_origin,
            home_town=model.home_town,
            occupation=model.occupation,
            phone_no=model.phone_no,
            join_year=model.join_year,
            photo=model.photo or "",
            position=list(model.position or []),
            instruments=list(model.instruments or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["MemberRepository", "SEARCHABLE_FIELDS"]
