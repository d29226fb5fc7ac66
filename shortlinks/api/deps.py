from fastapi import Request

from shortlinks.core.config import Settings
from shortlinks.db.database import Database
from shortlinks.services.shortener import LinkService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_link_service(request: Request) -> LinkService:
    return request.app.state.link_service
