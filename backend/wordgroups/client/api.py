from typing import Dict, List, Optional

import requests


class ApiError(Exception):
    """A failed call to the puzzle server (HTTP error or transport failure)."""

    def __init__(self, status: Optional[int], message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class GroupApiClient:
    """Thin client for one group's endpoints.

    The ``requests.Session`` keeps the login cookie set by ``create_group`` or
    ``join`` so later calls are made as that member.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip('/')
        self.http = session or requests.Session()
        self.timeout = timeout
        self.group_id: Optional[int] = None
        self.member: Optional[Dict] = None

    def _request(self, method: str, path: str, payload: Optional[Dict] = None):
        try:
            resp = self.http.request(method, f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ApiError(None, f"Could not reach the server: {exc}") from exc
        if not resp.ok:
            try:
                message = resp.json().get('error') or resp.reason
            except ValueError:
                message = resp.reason or f"HTTP {resp.status_code}"
            raise ApiError(resp.status_code, message)
        return resp.json()

    def _group_path(self, suffix: str = '') -> str:
        if self.group_id is None:
            raise ApiError(None, 'Join or create a group first')
        return f"/api/groups/{self.group_id}{suffix}"

    def _remember(self, data: Dict) -> Dict:
        self.group_id = data['group']['id']
        self.member = data['member']
        return data

    def create_group(self, name: str, member_name: str) -> Dict:
        return self._remember(self._request('POST', '/api/groups', {'name': name, 'member_name': member_name}))

    def join(self, code: str, name: str) -> Dict:
        return self._remember(self._request('POST', '/api/groups/join', {'code': code, 'name': name}))

    def fetch_group(self) -> Dict:
        return self._request('GET', self._group_path())

    def fetch_members(self) -> List[Dict]:
        return self._request('GET', self._group_path('/members'))

    def fetch_puzzles(self):
        from .session import PuzzleView
        return [PuzzleView.from_payload(p) for p in self._request('GET', self._group_path('/puzzles'))]

    def create_puzzle(self, difficulty: str, categories: List[Dict]) -> Dict:
        return self._request('POST', self._group_path('/puzzles'), {
            'difficulty': difficulty,
            'categories': categories,
        })

    def submit_completion(self, puzzle_id: int, incorrect_guesses: int) -> int:
        """Send the completion signal; returns the score the server recorded."""
        data = self._request('POST', self._group_path(f'/puzzles/{puzzle_id}/solve'),
                             {'incorrectGuesses': incorrect_guesses})
        return data['score']
