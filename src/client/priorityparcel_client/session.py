# priorityparcel_client/session.py
from __future__ import annotations
import os
from pathlib import Path

TOKEN_FILE = os.getenv("PRIORITYPARCEL_TOKEN_FILE")


class TokenStore:
    """Bearer token holder.

    A plain login keeps the token for this process only; "remember me"
    also writes it to ``path`` so the next run starts signed in.
    """

    def __init__(self, path: str | Path | None = TOKEN_FILE):
        self.path = Path(path) if path else None
        self._token: str | None = None

    def get(self) -> str | None:
        if self._token:
            return self._token
        if self.path and self.path.exists():
            self._token = self.path.read_text(encoding="utf-8").strip() or None
        return self._token

    def set(self, token: str, *, remember: bool = False) -> None:
        self._token = token
        if remember and self.path:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(token, encoding="utf-8")
        elif self.path and self.path.exists():
            # a session-only login replaces any remembered token
            self.path.unlink()

    def clear(self) -> None:
        self._token = None
        if self.path and self.path.exists():
            self.path.unlink()
