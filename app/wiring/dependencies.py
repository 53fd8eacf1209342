import logging
import threading

from app.core.config import settings
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.use_cases.booking import BookingUseCase
from app.application.use_cases.booking_store import BookingStore
from app.infrastructure.store.json_store import JsonBookingRepository
from app.infrastructure.store.memory_store import MemoryBookingRepository


_booking_repository: BookingRepositoryPort | None = None
_mutation_lock = threading.Lock()


def get_booking_repository() -> BookingRepositoryPort:
    global _booking_repository
    if _booking_repository is None:
        provider = settings.STORE_PROVIDER.lower()
        if provider == "memory":
            _booking_repository = MemoryBookingRepository()
        elif provider == "json":
            _booking_repository = JsonBookingRepository(settings.bookings_path)
        else:
            raise ValueError(f"Unknown STORE_PROVIDER: {settings.STORE_PROVIDER}")
        logging.getLogger(__name__).info("Using %s booking store", provider)
    return _booking_repository


def get_booking_store() -> BookingStore:
    lock = _mutation_lock if settings.BOOKING_SERIALIZE_WRITES else None
    return BookingStore(repository=get_booking_repository(), lock=lock)


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(store=get_booking_store())
