from typing import Any

import httpx

from edufeedback.core import config


class ApiError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ApiClient:
    """Thin JSON client for the feedback API.

    Any ``httpx.Client`` works as the transport, including FastAPI's TestClient.
    """

    def __init__(self, http: httpx.Client, token: str | None = None):
        self.http = http
        self.token = token

    @classmethod
    def from_base_url(cls, base_url: str | None = None, timeout_seconds: float = 10.0) -> 'ApiClient':
        return cls(httpx.Client(base_url=base_url or config.CLIENT_API_BASE_URL, timeout=timeout_seconds))

    def close(self) -> None:
        self.http.close()

    def _request(self, method: str, path: str, payload: dict | None = None) -> Any:
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'

        try:
            response = self.http.request(method, path, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise ApiError(0, f'Request to {path} failed: {exc}') from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            message = body.get('error') if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or response.reason_phrase or 'Request failed')
        return body

    def register(self, name: str, email: str, password: str, role: str) -> dict:
        return self._request('POST', '/api/register', {
            'name': name,
            'email': email,
            'password': password,
            'role': role,
        })

    def login(self, email: str, password: str) -> dict:
        return self._request('POST', '/api/login', {'email': email, 'password': password})

    def submit_feedback(self, user_id: int, category: str, rating: int, comments: str | None) -> dict:
        return self._request('POST', '/api/feedback', {
            'user_id': user_id,
            'category': category,
            'rating': rating,
            'comments': comments,
        })

    def feedback_history(self, user_id: int) -> list[dict]:
        return self._request('GET', f'/api/feedback/history/{user_id}')

    def admin_feedback(self) -> list[dict]:
        return self._request('GET', '/api/admin/feedback')

    def delete_feedback(self, feedback_id: int) -> dict:
        return self._request('DELETE', f'/api/admin/feedback/{feedback_id}')

    def admin_users(self) -> list[dict]:
        return self._request('GET', '/api/admin/users')

    def delete_user(self, user_id: int) -> dict:
        return self._request('DELETE', f'/api/admin/users/{user_id}')
