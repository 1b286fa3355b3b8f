"""Routes for registering and managing choir members."""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from choir_registry.application.use_cases.members import (
    SEARCH_RESULT_LIMIT,
    create_member as create_member_uc,
    delete_member as delete_member_uc,
    get_member as get_member_uc,
    list_all_members as list_all_members_uc,
    list_members as list_members_uc,
    search_members as search_members_uc,
    update_member as update_member_uc,
)
from choir_registry.domain.entities import Member
from choir_registry.domain.errors import ChoirRegistryError
from choir_registry.infrastructure.database import get_db
from choir_registry.infrastructure.reports import (
    CSV_CONTENT_TYPE,
    PDF_CONTENT_TYPE,
    render_members_csv,
    render_members_pdf,
)
from choir_registry.infrastructure.storage import AssetStore
from choir_registry.interfaces.api.dependencies import (
    MemberSubmission,
    provide_asset_store,
    read_member_submission,
)
from choir_registry.interfaces.api.errors import to_http_error
from choir_registry.interfaces.api.schemas import (
    MemberCollectionResponse,
    MemberEnvelope,
    MemberMutationResponse,
    MemberPageResponse,
    MemberRead,
    MessageResponse,
    PaginationRead,
)
from choir_registry.utils import now_in_app_timezone

router = APIRouter(prefix="/api/members", tags=["members"])
logger = logging.getLogger(__name__)


def _to_read_model(member: Member) -> MemberRead:
    return MemberRead.model_validate(member)


def _attachment(content: bytes, media_type: str, extension: str) -> Response:
    filename = f"choir-members-{now_in_app_timezone():%Y%m%d}.{extension}"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=MemberMutationResponse, status_code=status.HTTP_201_CREATED)
def register_member(
    submission: MemberSubmission = Depends(read_member_submission),
    db: Session = Depends(get_db),
    asset_store: AssetStore = Depends(provide_asset_store),
) -> MemberMutationResponse:
    """Register a member from the public form, with an optional photo."""

    try:
        member = create_member_uc(
            db, asset_store, fields=submission.fields, photo=submission.photo
        )
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    logger.info("Registered member %s", member.id)
    return MemberMutationResponse(
        message="Member registered successfully!", member=_to_read_model(member)
    )


@router.get("", response_model=MemberPageResponse)
def list_members(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    db: Session = Depends(get_db),
) -> MemberPageResponse:
    """Return one page of members, newest registrations first."""

    try:
        members, pagination = list_members_uc(db, page=page, limit=limit)
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    return MemberPageResponse(
        members=[_to_read_model(member) for member in members],
        pagination=PaginationRead.model_validate(pagination),
    )


@router.get("/all", response_model=MemberCollectionResponse)
def list_all_members(db: Session = Depends(get_db)) -> MemberCollectionResponse:
    """Return every member sorted by name."""

    try:
        members = list_all_members_uc(db)
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    return MemberCollectionResponse(
        members=[_to_read_model(member) for member in members], total=len(members)
    )


@router.get("/search", response_model=list[MemberRead])
def search_members(
    term: str | None = Query(None),
    db: Session = Depends(get_db),
) -> list[MemberRead]:
    """Return at most fifty members matching ``term`` as a plain list."""

    try:
        members = search_members_uc(db, term, limit=SEARCH_RESULT_LIMIT)
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    return [_to_read_model(member) for member in members]


@router.get("/search/{query}", response_model=MemberCollectionResponse)
def search_members_by_path(
    query: str,
    db: Session = Depends(get_db),
) -> MemberCollectionResponse:
    """Return every member matching ``query`` with the match count."""

    try:
        members = search_members_uc(db, query)
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    return MemberCollectionResponse(
        members=[_to_read_model(member) for member in members], total=len(members)
    )


@router.get("/export/pdf", response_class=Response)
def export_members_pdf(db: Session = Depends(get_db)) -> Response:
    """Download the member list as a PDF table."""

    try:
        members = list_all_members_uc(db)
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    return _attachment(render_members_pdf(members), PDF_CONTENT_TYPE, "pdf")


@router.get("/export/csv", response_class=Response)
def export_members_csv(db: Session = Depends(get_db)) -> Response:
    """Download the member list as CSV."""

    try:
        members = list_all_members_uc(db)
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    return _attachment(render_members_csv(members), CSV_CONTENT_TYPE, "csv")


@router.get("/{member_id}", response_model=MemberEnvelope)
def read_member(member_id: str, db: Session = Depends(get_db)) -> MemberEnvelope:
    """Return the member identified by ``member_id``."""

    try:
        member = get_member_uc(db, member_id)
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    return MemberEnvelope(member=_to_read_model(member))


@router.put("/{member_id}", response_model=MemberMutationResponse)
def update_member(
    member_id: str,
    submission: MemberSubmission = Depends(read_member_submission),
    db: Session = Depends(get_db),
    asset_store: AssetStore = Depends(provide_asset_store),
) -> MemberMutationResponse:
    """Update a member; a new photo replaces the previous one."""

    try:
        member = update_member_uc(
            db,
            asset_store,
            member_id=member_id,
            fields=submission.fields,
            photo=submission.photo,
        )
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    logger.info("Updated member %s", member.id)
    return MemberMutationResponse(
        message="Member updated successfully!", member=_to_read_model(member)
    )


@router.delete("/{member_id}", response_model=MessageResponse)
def delete_member(
    member_id: str,
    db: Session = Depends(get_db),
    asset_store: AssetStore = Depends(provide_asset_store),
) -> MessageResponse:
    """Delete a member together with their photo."""

    try:
        delete_member_uc(db, asset_store, member_id)
    except ChoirRegistryError as exc:
        raise to_http_error(exc) from exc
    logger.info("Deleted member %s", member_id)
    return MessageResponse(message="Member deleted successfully!")


__all__ = ["router"]
