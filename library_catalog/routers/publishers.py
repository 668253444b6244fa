"""
Publishers Router

Pages of the /Publishers folder (administrators only).
"""

from fastapi import APIRouter, status

from library_catalog.dependencies import CatalogGateway, RecordId, SelectedId
from library_catalog.models import Publisher
from library_catalog.schemas import (
    PublisherCreate,
    PublisherIndexResponse,
    PublisherResponse,
    PublisherUpdate,
)
from library_catalog.services import catalog
from library_catalog.services.records import create_record, update_record

router = APIRouter(
    prefix="/Publishers",
    tags=["Publishers"],
    responses={
        404: {"description": "Publisher not found"},
    },
)


@router.get(
    "/Index",
    response_model=PublisherIndexResponse,
    summary="List publishers",
    description="All publishers by name, plus the books of the selected publisher.",
)
def index(gateway: CatalogGateway, publisher_id: SelectedId = None) -> PublisherIndexResponse:
    data = catalog.publisher_index(gateway, publisher_id)
    return PublisherIndexResponse.model_validate(data)


@router.get("/Details", response_model=PublisherResponse, summary="Get a publisher")
def details(publisher_id: RecordId, gateway: CatalogGateway) -> PublisherResponse:
    return PublisherResponse.model_validate(gateway.find(Publisher, publisher_id))


@router.post(
    "/Create",
    response_model=PublisherResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a publisher",
)
def create(publisher_data: PublisherCreate, gateway: CatalogGateway) -> PublisherResponse:
    publisher = create_record(gateway, Publisher, "publisher", publisher_data.model_dump())
    return PublisherResponse.model_validate(publisher)


@router.post(
    "/Edit",
    response_model=PublisherResponse,
    summary="Edit a publisher",
    responses={409: {"description": "Publisher was changed by someone else"}},
)
def edit(
    publisher_id: RecordId,
    publisher_data: PublisherUpdate,
    gateway: CatalogGateway,
) -> PublisherResponse:
    values = publisher_data.model_dump(exclude_unset=True, exclude={"version"})
    publisher = update_record(
        gateway,
        Publisher,
        "publisher",
        publisher_id,
        values,
        expected_version=publisher_data.version,
    )
    return PublisherResponse.model_validate(publisher)


@router.post(
    "/Delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a publisher",
)
def delete(publisher_id: RecordId, gateway: CatalogGateway) -> None:
    gateway.delete(Publisher, publisher_id)
