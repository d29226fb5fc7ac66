from fastapi import APIRouter, BackgroundTasks, Depends, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session
import html
import logging

from shortlinks.api.deps import get_database
from shortlinks.db import database, repository
from shortlinks.db.database import Database
from shortlinks.services import metrics
from shortlinks.utils.encoding import is_valid_short_code

logger = logging.getLogger(__name__)

router = APIRouter(tags=["redirect"])


def not_found_page(short_code: str) -> HTMLResponse:
    body = f"<html><body><div>No link found for: {html.escape(short_code)}</div></body></html>"
    return HTMLResponse(content=body, status_code=status.HTTP_404_NOT_FOUND)


@router.get("/{short_code}")
def redirect_to_url_endpoint(
    short_code: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(database.get_db),
    store: Database = Depends(get_database),
):
    """
    Access the shortened URL and get redirected to the original long URL.
    """
    if not is_valid_short_code(short_code):
        logger.warning(f"Redirect 404: Malformed short code: {short_code}")
        return not_found_page(short_code)

    db_link = repository.get_link_by_code(db, short_code)
    if db_link is None:
        logger.warning(f"Redirect 404: Short code not found: {short_code}")
        return not_found_page(short_code)

    # Counted after the response is sent so the redirect never waits on it
    metrics.schedule_click(background_tasks, store, short_code)
    logger.info(f"Redirect {short_code} -> {db_link.long_url[:50]}")
    return RedirectResponse(url=db_link.long_url, status_code=status.HTTP_302_FOUND)
