"""REST API client for wordmatch server."""

import requests


class WordMatchAPIClient:
    """Client for communicating with the wordmatch REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        if data is None:
            data = {}
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_state(self) -> dict:
        """Get the current game state."""
        return self._get("/api/state")

    def new_round(self) -> dict:
        return self._post("/api/round/new")

    def select(self, column: str, pair_id: int) -> dict:
        """Tap a card in the 'left' or 'right' column."""
        return self._post("/api/select", {'column': column, 'pair_id': pair_id})

    def reveal_hint(self, pair_id: int) -> dict:
        return self._post("/api/hint", {'pair_id': pair_id})

    def hide_hint(self) -> dict:
        return self._post("/api/hint/hide")

    def toggle_swap(self) -> dict:
        return self._post("/api/swap")

    def reset_session(self) -> dict:
        return self._post("/api/session/reset")

    def get_events(self, after: int = 0) -> dict:
        """Get click and round-complete events newer than `after`."""
        return self._get("/api/events", {'after': after})
