import json
import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

from newgame.application.mappers.newgame_options_mapper import request_from_payload, request_to_payload
from newgame.domain.models.newgame import CharacterRequest
from newgame.domain.repositories import NewGameOptionsRepository


logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"


class SqlNewGameOptionsRepository(NewGameOptionsRepository):
    """Previous new-game choices stored one row per profile in ``newgame_options``."""

    def __init__(self, session_factory: sessionmaker, profile: str = DEFAULT_PROFILE) -> None:
        self.session_factory = session_factory
        self.profile = str(profile or DEFAULT_PROFILE).strip() or DEFAULT_PROFILE
        self._schema_ready = False

    def ensure_schema(self) -> None:
        if self._schema_ready:
            return
        with self.session_factory.begin() as session:
            session.execute(
                text(
                    """
                    CREATE TABLE IF NOT EXISTS newgame_options (
                        profile VARCHAR(64) PRIMARY KEY,
                        payload TEXT NOT NULL,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )
            )
        self._schema_ready = True

    def load(self) -> Optional[CharacterRequest]:
        self.ensure_schema()
        with self.session_factory() as session:
            row = session.execute(
                text("SELECT payload FROM newgame_options WHERE profile = :profile"),
                {"profile": self.profile},
            ).first()
        if row is None:
            return None
        try:
            payload = json.loads(row.payload)
        except ValueError:
            logger.warning("Ignoring unreadable new game options for profile %r", self.profile)
            return None
        if not isinstance(payload, dict):
            return None
        return request_from_payload(payload)

    def save(self, choice: CharacterRequest) -> None:
        self.ensure_schema()
        payload = json.dumps(request_to_payload(choice), ensure_ascii=False)
        with self.session_factory.begin() as session:
            updated = session.execute(
                text(
                    """
                    UPDATE newgame_options
                    SET payload = :payload, updated_at = CURRENT_TIMESTAMP
                    WHERE profile = :profile
                    """
                ),
                {"payload": payload, "profile": self.profile},
            )
            if updated.rowcount == 0:
                session.execute(
                    text("INSERT INTO newgame_options (profile, payload) VALUES (:profile, :payload)"),
                    {"profile": self.profile, "payload": payload},
                )
