from .member import (
    ErrorResponse,
    MemberCollectionResponse,
    MemberEnvelope,
    MemberMutationResponse,
    MemberPageResponse,
    MemberRead,
    MessageResponse,
    PaginationRead,
    ZonesResponse,
)

__all__ = [
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
