"""
Concurrent admission against a file-backed SQLite database.

Each worker uses its own session and connection, as separate requests
would. However many requests race for a slot, new bookings and
reschedules alike, only its capacity succeeds.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest
from sqlalchemy.orm import sessionmaker

from app import crud
from app.constants.booking import BookingStatus
from app.core.errors import SlotFull
from app.db.base_class import Base
from app.db.session import make_engine
from app.models.booking import Booking
from app.schemas.booking import BookingRequest, RescheduleRequest
from app.services.booking.admission import BookingAdmission
from app.services.booking.manage import BookingManager
from app.utils.timeutils import as_utc
from tests.utils.common import NOW
from tests.utils.event import create_test_event

WORKERS = 8


@pytest.fixture()
def file_engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'concurrency.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


def _run_together(engine, work):
    """Run ``work(db, i)`` in WORKERS threads released at the same moment."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    barrier = threading.Barrier(WORKERS)

    def attempt(i):
        db = SessionLocal()
        try:
            barrier.wait()
            work(db, i)
            return "ok"
        except SlotFull:
            return "full"
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        return list(pool.map(attempt, range(WORKERS)))


def _book(db, slug, i, time="10:00"):
    event = crud.event.get_by_slug(db, tenant_id="acme", slug=slug)
    req = BookingRequest(
        date="2026-11-02", time=time, name=f"Guest {i}", email=f"guest{i}@example.com"
    )
    return BookingAdmission(db).admit(event, req, now=NOW)


def _race(engine, slug):
    return _run_together(engine, lambda db, i: _book(db, slug, i))


def _count(engine):
    db = sessionmaker(bind=engine)()
    try:
        return db.query(Booking).count()
    finally:
        db.close()


def test_exactly_one_wins_a_single_seat(file_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=file_engine)
    db = SessionLocal()
    create_test_event(db, slug="solo")
    db.close()

    results = _race(file_engine, "solo")

    assert results.count("ok") == 1
    assert results.count("full") == WORKERS - 1
    assert _count(file_engine) == 1


def test_capacity_is_never_exceeded(file_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=file_engine)
    db = SessionLocal()
    create_test_event(
        db, slug="group", config={"monday": [{"start": "10:00", "end": "11:00", "max_participants": 3}]}
    )
    db.close()

    results = _race(file_engine, "group")

    assert results.count("ok") == 3
    assert results.count("full") == WORKERS - 3
    assert _count(file_engine) == 3


def test_reschedule_and_new_bookings_share_the_last_seat(file_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=file_engine)
    db = SessionLocal()
    create_test_event(db, slug="moving")
    token = _book(db, "moving", "existing", time="11:00").management_token
    db.close()

    def work(db, i):
        if i == 0:
            BookingManager(db).reschedule(
                token, RescheduleRequest(date="2026-11-02", time="10:00"), now=NOW
            )
        else:
            _book(db, "moving", i)

    results = _run_together(file_engine, work)

    assert results.count("ok") == 1
    assert results.count("full") == WORKERS - 1

    db = SessionLocal()
    try:
        at_ten = [
            b
            for b in db.query(Booking).filter(Booking.status == BookingStatus.CONFIRMED)
            if as_utc(b.start_time) == datetime(2026, 11, 2, 9, 0, tzinfo=timezone.utc)
        ]
        assert len(at_ten) == 1
        moved = results[0] == "ok"
        assert (at_ten[0].management_token == token) is moved
        assert db.query(Booking).count() == (1 if moved else 2)
    finally:
        db.close()
