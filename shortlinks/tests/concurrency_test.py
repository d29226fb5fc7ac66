import random
import threading
from concurrent.futures import ThreadPoolExecutor

from shortlinks.core.errors import ConflictError
from shortlinks.db import repository
from shortlinks.db.models import Link, utcnow
from shortlinks.services import metrics
from shortlinks.services.allocator import CodeAllocator
from shortlinks.services.shortener import LinkService


def test_concurrent_clicks_are_not_lost(file_database):
    db = file_database.SessionLocal()
    try:
        repository.create_link(db, "hot123", "https://example.com/hot")
    finally:
        db.close()

    clicks = 25
    started = utcnow()
    with ThreadPoolExecutor(max_workers=8) as pool:
        for _ in range(clicks):
            pool.submit(metrics.record_click, file_database, "hot123")

    db = file_database.SessionLocal()
    try:
        link = repository.get_link_by_code(db, "hot123")
        assert link.click_count == clicks
        assert link.last_clicked >= started
    finally:
        db.close()


def test_racing_custom_codes_have_one_winner(file_database):
    service = LinkService(CodeAllocator(rng=random.Random(0)))
    barrier = threading.Barrier(2)

    def create(url):
        db = file_database.SessionLocal()
        try:
            barrier.wait()
            return service.create_link(db, url, "race01").long_url
        except ConflictError as e:
            return e
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(create, ["https://example.com/one", "https://example.com/two"]))

    winners = [r for r in results if isinstance(r, str)]
    losers = [r for r in results if isinstance(r, ConflictError)]
    assert len(winners) == 1
    assert len(losers) == 1

    db = file_database.SessionLocal()
    try:
        rows = db.query(Link).filter(Link.short_code == "race01").all()
        assert len(rows) == 1
        assert rows[0].long_url == winners[0]
    finally:
        db.close()
