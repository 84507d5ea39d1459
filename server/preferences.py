"""PreferenceStore adapter binding one user to a storage backend."""

from core.interfaces import PreferenceStore, Storage


class UserPreferences(PreferenceStore):
    """PreferenceStore for a single user over a storage backend.

    Values are read once and kept in memory; every setter writes the full
    record through immediately.
    """

    def __init__(self, storage: Storage, user_id: str = "default"):
        self.storage = storage
        self.user_id = user_id
        self._prefs = storage.load_preferences(user_id)

    def get_best_streak(self) -> int:
        return self._prefs['best_streak']

    def set_best_streak(self, streak: int) -> None:
        self._prefs['best_streak'] = streak
        self.storage.save_preferences(dict(self._prefs), self.user_id)

    def get_swapped(self) -> bool:
        return self._prefs['swapped']

    def set_swapped(self, swapped: bool) -> None:
        self._prefs['swapped'] = swapped
        self.storage.save_preferences(dict(self._prefs), self.user_id)
