import re
from pathlib import Path

from newgame.domain.repositories import SaveIndex


SAVE_SUFFIX = ".cs"


def save_filename(name: str) -> str:
    stem = re.sub(r"[^A-Za-z0-9_\-]+", "_", str(name or "").strip())
    return f"{stem}{SAVE_SUFFIX}"


class DirectorySaveIndex(SaveIndex):
    def __init__(self, save_dir: str | Path) -> None:
        self.save_dir = Path(save_dir)

    def save_exists(self, name: str) -> bool:
        if not str(name or "").strip():
            return False
        return (self.save_dir / save_filename(name)).exists()
