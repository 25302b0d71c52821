from typing import Iterable, Optional, Set

from newgame.domain.repositories import SaveIndex


class InMemorySaveIndex(SaveIndex):
    def __init__(self, names: Optional[Iterable[str]] = None):
        self._names: Set[str] = {str(name).strip().lower() for name in (names or [])}

    def add(self, name: str) -> None:
        self._names.add(str(name).strip().lower())

    def save_exists(self, name: str) -> bool:
        return str(name or "").strip().lower() in self._names
