from abc import ABC, abstractmethod

from app.domain.entities.booking import Booking


class BookingRepositoryPort(ABC):
    @abstractmethod
    def load_all(self) -> list[Booking]:
        """
        Load the entire booking collection.
        A missing collection is initialized empty; a corrupt one loads as empty.
        """
        raise NotImplementedError

    @abstractmethod
    def save_all(self, bookings: list[Booking]) -> None:
        """Replace the entire booking collection."""
        raise NotImplementedError
