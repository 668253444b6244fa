"""
Members Router

Pages of the /Members folder (administrators only).

Members normally come from /auth/register, which also creates the
sign-in account; this folder lets staff add walk-in members and keep
their details current. A member's email is set once and never edited.
"""

import logging

from fastapi import APIRouter, status

from library_catalog.dependencies import CatalogGateway, RecordId
from library_catalog.models import Member
from library_catalog.schemas import (
    BorrowingResponse,
    MemberCreate,
    MemberResponse,
    MemberUpdate,
)
from library_catalog.services.borrowing import list_borrowings
from library_catalog.services.records import create_record, update_record

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/Members",
    tags=["Members"],
    responses={
        404: {"description": "Member not found"},
    },
)


@router.get(
    "/Index",
    response_model=list[MemberResponse],
    summary="List members",
)
def index(gateway: CatalogGateway) -> list[MemberResponse]:
    members = gateway.list(Member, order_by=(Member.last_name, Member.first_name, Member.id))
    return [MemberResponse.model_validate(m) for m in members]


@router.get("/Details", response_model=MemberResponse, summary="Get a member")
def details(member_id: RecordId, gateway: CatalogGateway) -> MemberResponse:
    return MemberResponse.model_validate(gateway.find(Member, member_id))


@router.get(
    "/Borrowings",
    response_model=list[BorrowingResponse],
    summary="A member's borrowings",
)
def borrowings(member_id: RecordId, gateway: CatalogGateway) -> list[BorrowingResponse]:
    """Every borrowing of the member, newest first."""
    gateway.find(Member, member_id)
    return [
        BorrowingResponse.model_validate(b)
        for b in list_borrowings(gateway, member_id=member_id)
    ]


@router.post(
    "/Create",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a member",
)
def create(member_data: MemberCreate, gateway: CatalogGateway) -> MemberResponse:
    """
    Create a member without a sign-in account.

    Names must start with a capital letter; the phone number, when given,
    must look like 0722-123-123.
    """
    member = create_record(gateway, Member, "member", member_data.model_dump())
    logger.info(f"Member created: {member.email}")
    return MemberResponse.model_validate(member)


@router.post(
    "/Edit",
    response_model=MemberResponse,
    summary="Edit a member",
    responses={409: {"description": "Member was changed by someone else"}},
)
def edit(member_id: RecordId, member_data: MemberUpdate, gateway: CatalogGateway) -> MemberResponse:
    """Update name, address or phone. Sending an email field is rejected (422)."""
    values = member_data.model_dump(exclude_unset=True, exclude={"version"})
    member = update_record(
        gateway, Member, "member", member_id, values, expected_version=member_data.version
    )
    return MemberResponse.model_validate(member)


@router.post(
    "/Delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a member",
)
def delete(member_id: RecordId, gateway: CatalogGateway) -> None:
    """Delete a member together with their borrowings."""
    gateway.delete(Member, member_id)
