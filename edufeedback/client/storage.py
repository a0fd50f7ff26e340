import json
import logging
from pathlib import Path

from edufeedback.client.state import CurrentUser

logger = logging.getLogger(__name__)

STORAGE_KEY = 'eduFeedbackUser'


class IdentityStorage:
    """JSON key/value file that keeps the logged-in identity across restarts."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError):
            logger.warning('Ignoring unreadable client storage at %s', self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding='utf-8')

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def load_user(self) -> CurrentUser | None:
        raw = self.get_item(STORAGE_KEY)
        if not raw:
            return None
        try:
            return CurrentUser.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            logger.warning('Discarding malformed stored identity')
            self.remove_item(STORAGE_KEY)
            return None

    def save_user(self, user: CurrentUser) -> None:
        self.set_item(STORAGE_KEY, json.dumps(user.to_dict()))

    def clear_user(self) -> None:
        self.remove_item(STORAGE_KEY)
