import logging
import os
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from newgame.application.services.event_bus import EventBus
from newgame.application.services.newgame_service import NewGameService
from newgame.application.services.options_persistence import register_newgame_options_handlers
from newgame.application.services.prompter import NewGamePrompter
from newgame.application.services.seed_policy import derive_rng
from newgame.domain.repositories import NewGameOptionsRepository, SaveIndex
from newgame.infrastructure.files.options_file import JsonNewGameOptionsRepository
from newgame.infrastructure.files.save_index import DirectorySaveIndex
from newgame.infrastructure.inmemory.catalog_oracle import CatalogCompatibilityOracle
from newgame.infrastructure.inmemory.save_index import InMemorySaveIndex
from newgame.infrastructure.inmemory.scenario_maps import InMemoryScenarioMapRepository
from newgame.infrastructure.name_generation import SyllableNameGenerator


logger = logging.getLogger(__name__)

DEFAULT_OPTIONS_PATH = Path.home() / ".newgame" / "newgame_options.json"


def options_path() -> Path:
    raw = os.getenv("NEWGAME_OPTIONS_PATH", "").strip()
    return Path(raw).expanduser() if raw else DEFAULT_OPTIONS_PATH


def _build_sql_options_repo(database_url: str) -> NewGameOptionsRepository:
    from newgame.infrastructure.db.sql.connection import create_session_factory
    from newgame.infrastructure.db.sql.options_repo import SqlNewGameOptionsRepository

    profile = os.getenv("NEWGAME_PROFILE", "").strip() or "default"
    repo = SqlNewGameOptionsRepository(create_session_factory(database_url), profile=profile)
    repo.ensure_schema()
    return repo


def build_options_repo() -> NewGameOptionsRepository:
    database_url = os.getenv("NEWGAME_DATABASE_URL", "").strip()
    if database_url:
        try:
            return _build_sql_options_repo(database_url)
        except SQLAlchemyError as exc:
            logger.warning("Options database unavailable (%s); using the options file instead", exc)
    return JsonNewGameOptionsRepository(options_path())


def build_save_index() -> SaveIndex:
    save_dir = os.getenv("NEWGAME_SAVE_DIR", "").strip()
    if not save_dir:
        return InMemorySaveIndex()
    return DirectorySaveIndex(save_dir)


def create_newgame_service(
    prompter: NewGamePrompter,
    options_repo: Optional[NewGameOptionsRepository] = None,
    seed: Optional[str] = None,
) -> NewGameService:
    if seed is None:
        seed = os.getenv("NEWGAME_SEED")
    event_bus = EventBus()
    register_newgame_options_handlers(event_bus, options_repo)

    return NewGameService(
        CatalogCompatibilityOracle(),
        map_repo=InMemoryScenarioMapRepository(),
        save_index=build_save_index(),
        prompter=prompter,
        event_bus=event_bus,
        rng=derive_rng(seed),
        name_generator=SyllableNameGenerator(),
        sprint_map=os.getenv("NEWGAME_SPRINT_MAP", "").strip(),
    )
