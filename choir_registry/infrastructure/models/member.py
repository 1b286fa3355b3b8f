"""SQLAlchemy model for choir member records."""

from sqlalchemy import JSON, Column, DateTime, Integer, String

from choir_registry.domain.entities import TEXT_FIELD_MAX_LENGTHS as _LENGTHS
from choir_registry.infrastructure.database import Base
from choir_registry.utils import now_in_app_naive_datetime


class MemberModel(Base):
    """Database representation of a registered choir member."""

    __tablename__ = "member"

    id = Column(String(32), primary_key=True)
    full_name = Column(String(_LENGTHS["full_name"]), nullable=True, index=True)
    gender = Column(String(_LENGTHS["gender"]), nullable=True)
    status = Column(String(_LENGTHS["status"]), nullable=True)
    part = Column(String(_LENGTHS["part"]), nullable=True)
    zone = Column(String(_LENGTHS["zone"]), nullable=True, index=True)
    area = Column(String(_LENGTHS["area"]), nullable=True)
    parish = Column(String(_LENGTHS["parish"]), nullable=True)
    parish_address = Column(String(_LENGTHS["parish_address"]), nullable=True)
    residential_address = Column(String(_LENGTHS["residential_address"]), nullable=True)
    state_of_origin = Column(String(_LENGTHS["state_of_origin"]), nullable=True)
    home_town = Column(String(_LENGTHS["home_town"]), nullable=True)
    occupation = Column(String(_LENGTHS["occupation"]), nullable=True)
    phone_no = Column(String(_LENGTHS["phone_no"]), nullable=True)
    join_year = Column(Integer, nullable=True)
    photo = Column(String(255), nullable=False, default="")
    position = Column(JSON, nullable=False, default=list)
    instruments = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["MemberModel"]
