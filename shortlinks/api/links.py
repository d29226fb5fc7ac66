from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging

from shortlinks.api.deps import get_link_service, get_settings
from shortlinks.core.config import Settings
from shortlinks.db import database
from shortlinks.db.models import Link
from shortlinks.schemas import ApiResponse, DeleteResult, LinkCreateRequest, LinkResponse
from shortlinks.services.shortener import LinkService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/links", tags=["links"])


def to_response(db_link: Link, settings: Settings) -> LinkResponse:
    return LinkResponse(
        id=db_link.id,
        short_code=db_link.short_code,
        long_url=db_link.long_url,
        click_count=db_link.click_count,
        last_clicked=db_link.last_clicked,
        created_at=db_link.created_at,
        short_url=f"{settings.BASE_URL.rstrip('/')}/{db_link.short_code}",
    )


@router.get("", response_model=ApiResponse[List[LinkResponse]], response_model_exclude_unset=True)
def list_links_endpoint(
    db: Session = Depends(database.get_db),
    service: LinkService = Depends(get_link_service),
    settings: Settings = Depends(get_settings),
):
    links = service.list_links(db)
    logger.info(f"Found {len(links)} links")
    return ApiResponse(success=True, data=[to_response(link, settings) for link in links])


@router.post(
    "",
    response_model=ApiResponse[LinkResponse],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_link_endpoint(
    link_request: LinkCreateRequest,
    db: Session = Depends(database.get_db),
    service: LinkService = Depends(get_link_service),
    settings: Settings = Depends(get_settings),
):
    db_link = service.create_link(db, link_request.url, link_request.custom_code)
    logger.info(f"API success: Shortened {db_link.long_url[:50]}... to {db_link.short_code}")
    return ApiResponse(success=True, data=to_response(db_link, settings))


@router.get("/{short_code}", response_model=ApiResponse[LinkResponse], response_model_exclude_unset=True)
def get_link_endpoint(
    short_code: str,
    db: Session = Depends(database.get_db),
    service: LinkService = Depends(get_link_service),
    settings: Settings = Depends(get_settings),
):
    db_link = service.get_link(db, short_code)
    return ApiResponse(success=True, data=to_response(db_link, settings))


@router.delete("/{short_code}", response_model=ApiResponse[DeleteResult], response_model_exclude_unset=True)
def delete_link_endpoint(
    short_code: str,
    db: Session = Depends(database.get_db),
    service: LinkService = Depends(get_link_service),
):
    service.delete_link(db, short_code)
    logger.info(f"Link deleted: {short_code}")
    return ApiResponse(success=True, data=DeleteResult(message="Link deleted successfully"))
