"""File-based preference storage implementation."""

import json
import logging
import os

from core.config import DEFAULT_BEST_STREAK, DEFAULT_SWAPPED
from core.interfaces import Storage

logger = logging.getLogger(__name__)


def default_preferences() -> dict:
    return {'best_streak': DEFAULT_BEST_STREAK, 'swapped': DEFAULT_SWAPPED}


class FileStorage(Storage):
    """File-based preference storage, one JSON file per user."""

    def __init__(self, state_dir: str = None):
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or project_root

    def _get_prefs_file(self, user_id: str) -> str:
        """Get preferences file path for a user."""
        if user_id == "default":
            return os.path.join(self.state_dir, 'wordmatch_prefs.json')
        return os.path.join(self.state_dir, f'wordmatch_prefs_{user_id}.json')

    def load_preferences(self, user_id: str = "default") -> dict:
        prefs = default_preferences()
        prefs_file = self._get_prefs_file(user_id)
        if os.path.exists(prefs_file):
            try:
                with open(prefs_file, 'r') as f:
                    stored = json.load(f)
                prefs['best_streak'] = int(stored.get('best_streak', DEFAULT_BEST_STREAK))
                prefs['swapped'] = bool(stored.get('swapped', DEFAULT_SWAPPED))
            except Exception as e:
                logger.warning(f"Ignoring unreadable preferences {prefs_file}: {e}")
        return prefs

    def save_preferences(self, prefs: dict, user_id: str = "default") -> None:
        os.makedirs(self.state_dir, exist_ok=True)
        with open(self._get_prefs_file(user_id), 'w') as f:
            json.dump(prefs, f, indent=2)

    def list_users(self) -> list[str]:
        """List all user IDs with stored preferences."""
        users = []
        if os.path.exists(self.state_dir):
            for filename in os.listdir(self.state_dir):
                if filename == 'wordmatch_prefs.json':
                    users.append('default')
                elif filename.startswith('wordmatch_prefs_') and filename.endswith('.json'):
                    users.append(filename[16:-5])  # Remove 'wordmatch_prefs_' and '.json'
        return sorted(users)
