"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod
from typing import Callable


class WordSource(ABC):
    """Abstract base class for the vocabulary corpus."""

    @abstractmethod
    def all_pairs(self) -> list:
        """Return every WordPair. Loaded once, never mutated afterwards."""
        pass


class PreferenceStore(ABC):
    """Abstract base class for the two persistent scalars."""

    @abstractmethod
    def get_best_streak(self) -> int:
        """Best streak ever reached. Defaults to 0."""
        pass

    @abstractmethod
    def set_best_streak(self, streak: int) -> None:
        """Persist the best streak immediately."""
        pass

    @abstractmethod
    def get_swapped(self) -> bool:
        """Column swap flag. Defaults to False."""
        pass

    @abstractmethod
    def set_swapped(self, swapped: bool) -> None:
        """Persist the column swap flag immediately."""
        pass


class Cancellable(ABC):
    """Handle returned by a Scheduler."""

    @abstractmethod
    def cancel(self) -> None:
        pass


class Scheduler(ABC):
    """Abstract base class for deferred and periodic callbacks."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        """Run callback once after delay seconds."""
        pass

    @abstractmethod
    def start_ticker(self, interval: float, callback: Callable[[], None]) -> Cancellable:
        """Run callback every interval seconds until cancelled."""
        pass


class Storage(ABC):
    """Abstract base class for per-user preference storage."""

    @abstractmethod
    def load_preferences(self, user_id: str = "default") -> dict:
        """Load {best_streak, swapped} for a user, defaults if none stored."""
        pass

    @abstractmethod
    def save_preferences(self, prefs: dict, user_id: str = "default") -> None:
        """Save {best_streak, swapped} for a user. Raises on failure."""
        pass

    @abstractmethod
    def list_users(self) -> list[str]:
        """List user IDs with stored preferences."""
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass
