"""Member schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model that reads domain objects and writes camelCase JSON."""

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class MemberRead(ApiModel):
    id: str
    document_id: str = Field(validation_alias="id", serialization_alias="_id")
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
    position: list[str] = Field(default_factory=list)
    instruments: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field(alias="photoUrl")  # type: ignore[prop-decorator]
    @property
    def photo_url(self) -> str | None:
        return f"/uploads/{self.photo}" if self.photo else None


class PaginationRead(ApiModel):
    current_page: int
    page_size: int = Field(
        validation_alias=AliasChoices("page_size", "limit"), serialization_alias="limit"
    )
    total_pages: int
    total_members: int
    has_next: bool
    has_prev: bool


class MemberEnvelope(ApiModel):
    success: bool = True
    member: MemberRead


class MemberMutationResponse(ApiModel):
    success: bool = True
    message: str
    member: MemberRead


class MemberPageResponse(ApiModel):
    success: bool = True
    members: list[MemberRead]
    pagination: PaginationRead


class MemberCollectionResponse(ApiModel):
    success: bool = True
    members: list[MemberRead]
    total: int


class ZonesResponse(ApiModel):
    success: bool = True
    zones: list[str]


class MessageResponse(ApiModel):
    success: bool = True
    message: str


class ErrorResponse(ApiModel):
    success: bool = False
    message: str
    error: str


__all__ = [
    "ApiModel",
    "ErrorResponse",
    "MemberCollectionResponse",
    "MemberEnvelope",
    "MemberMutationResponse",
    "MemberPageResponse",
    "MemberRead",
    "MessageResponse",
    "PaginationRead",
    "ZonesResponse",
]
