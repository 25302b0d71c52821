import json
import logging
import os
import time
from pathlib import Path
from typing import Optional

from newgame.application.mappers.newgame_options_mapper import request_from_payload, request_to_payload
from newgame.domain.models.newgame import CharacterRequest
from newgame.domain.repositories import NewGameOptionsRepository


logger = logging.getLogger(__name__)

OPTIONS_FORMAT_VERSION = 1


class JsonNewGameOptionsRepository(NewGameOptionsRepository):
    """Previous new-game choices in a small JSON file, written atomically."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> Optional[CharacterRequest]:
        if not self.path.exists():
            return None
        try:
            envelope = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable new game options file %s", self.path)
            return None
        if not isinstance(envelope, dict):
            return None
        payload = envelope.get("choice")
        if not isinstance(payload, dict):
            return None
        return request_from_payload(payload)

    def save(self, choice: CharacterRequest) -> None:
        envelope = {
            "version": OPTIONS_FORMAT_VERSION,
            "stored_at": int(time.time()),
            "choice": request_to_payload(choice),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(envelope, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)
