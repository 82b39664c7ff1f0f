"""Tab-scoped token storage for the client auth context."""

from typing import Protocol

TOKEN_STORAGE_KEY = "cms_token"


class TokenStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class TabSessionStorage:
    """
    In-memory key/value store living exactly as long as one client (one browser tab).

    Nothing is written to disk and nothing is shared between instances, so an admin
    session never outlives its tab or leaks into another one.
    """

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
