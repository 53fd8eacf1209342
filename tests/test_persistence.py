"""
Tests for durable booking persistence.
"""

from __future__ import annotations

import json
import tempfile
import threading
from pathlib import Path

import pytest

from app.application.exceptions import PersistenceError
from app.application.use_cases.booking_store import BookingStore
from app.application.utils.slot_validator import validate
from app.domain.entities.booking import Booking
from app.infrastructure.store.json_store import JsonBookingRepository


def _booking(booking_id: str = "abc", date: str = "2024-06-01") -> Booking:
    return Booking(
        id=booking_id,
        date=date,
        time="09:00",
        duration=60,
        start_minutes=540,
        end_minutes=600,
        created_at="2024-05-01T12:00:00.000Z",
    )


def test_missing_file_is_materialized_as_empty_array():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "nested" / "bookings.json"
        repository = JsonBookingRepository(path)

        assert repository.load_all() == []
        assert path.read_text(encoding="utf-8") == "[]\n"


def test_saved_collection_is_pretty_printed_camel_case():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        repository = JsonBookingRepository(path)
        repository.save_all([_booking()])

        raw = path.read_text(encoding="utf-8")
        assert raw.endswith("]\n")
        assert '\n  {\n    "id": "abc",' in raw
        assert json.loads(raw) == [
            {
                "id": "abc",
                "date": "2024-06-01",
                "time": "09:00",
                "duration": 60,
                "startMinutes": 540,
                "endMinutes": 600,
                "createdAt": "2024-05-01T12:00:00.000Z",
            }
        ]
        assert list(Path(tmpdir).glob("*.tmp")) == []


def test_collection_survives_new_repository_instance():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        JsonBookingRepository(path).save_all([_booking("a"), _booking("b", "2024-06-02")])

        loaded = JsonBookingRepository(path).load_all()
        assert [b.id for b in loaded] == ["a", "b"]
        assert loaded[0] == _booking("a")


@pytest.mark.parametrize("payload", ["{not json", '{"bookings": []}', "42", "null", ""])
def test_corrupt_or_non_array_payload_loads_as_empty(payload):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        path.write_text(payload, encoding="utf-8")

        assert JsonBookingRepository(path).load_all() == []


def test_malformed_entries_are_skipped():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        good = {
            "id": "ok",
            "date": "2024-06-01",
            "time": "09:00",
            "duration": 60,
            "startMinutes": 540,
            "endMinutes": 600,
            "createdAt": "2024-05-01T12:00:00.000Z",
        }
        path.write_text(json.dumps([good, {"id": "broken"}, "junk"]), encoding="utf-8")

        loaded = JsonBookingRepository(path).load_all()
        assert [b.id for b in loaded] == ["ok"]


def test_unwritable_location_raises_persistence_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        # A directory where the file should be cannot be read as a collection.
        path = Path(tmpdir) / "bookings.json"
        path.mkdir()

        repository = JsonBookingRepository(path)
        with pytest.raises(PersistenceError):
            repository.load_all()
        with pytest.raises(PersistenceError):
            repository.save_all([_booking()])


def test_store_round_trip_through_json_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        store = BookingStore(repository=JsonBookingRepository(path))

        booking = store.create(validate("2024-06-01", "09:00", 60))
        reloaded = BookingStore(repository=JsonBookingRepository(path)).list()
        assert reloaded == [booking]

        assert store.delete(booking.id) is True
        assert json.loads(path.read_text(encoding="utf-8")) == []


@pytest.mark.parametrize(
    "field, value",
    [("duration", 60.5), ("duration", True), ("startMinutes", "540"), ("endMinutes", None)],
)
def test_non_integral_minute_fields_are_skipped(field, value):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        entry = {
            "id": "odd",
            "date": "2024-06-01",
            "time": "09:00",
            "duration": 60,
            "startMinutes": 540,
            "endMinutes": 600,
            "createdAt": "",
        }
        entry[field] = value
        path.write_text(json.dumps([entry]), encoding="utf-8")

        assert JsonBookingRepository(path).load_all() == []


def test_integral_float_minutes_are_accepted():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        entry = {
            "id": "f",
            "date": "2024-06-01",
            "time": "09:00",
            "duration": 60.0,
            "startMinutes": 540,
            "endMinutes": 600.0,
        }
        path.write_text(json.dumps([entry]), encoding="utf-8")

        loaded = JsonBookingRepository(path).load_all()
        assert loaded[0].duration == 60
        assert loaded[0].end_minutes == 600


def test_concurrent_saves_never_expose_partial_file():
    """Writers racing on one repository must not fail or leave a torn file for readers."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        repository = JsonBookingRepository(path)
        repository.ensure_file()

        collections = [[_booking(f"w{n}-{i}") for i in range(20)] for n in range(4)]
        write_errors: list[Exception] = []
        torn_reads: list[str] = []
        done = threading.Event()

        def writer(bookings):
            try:
                for _ in range(100):
                    repository.save_all(bookings)
            except Exception as e:
                write_errors.append(e)

        def reader():
            while not done.is_set():
                raw = path.read_text(encoding="utf-8")
                try:
                    data = json.loads(raw)
                except json.JSONDecodeError:
                    torn_reads.append(raw)
                    continue
                if not isinstance(data, list):
                    torn_reads.append(raw)

        reader_thread = threading.Thread(target=reader)
        reader_thread.start()
        writers = [threading.Thread(target=writer, args=(c,)) for c in collections]
        for thread in writers:
            thread.start()
        for thread in writers:
            thread.join(timeout=60)
        done.set()
        reader_thread.join(timeout=10)

        assert write_errors == []
        assert torn_reads == []
        assert repository.load_all() in collections
        assert list(Path(tmpdir).glob("*.tmp")) == []
