import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


NEWGAME_ENV_VARS = (
    "NEWGAME_OPTIONS_PATH",
    "NEWGAME_DATABASE_URL",
    "NEWGAME_PROFILE",
    "NEWGAME_SAVE_DIR",
    "NEWGAME_SEED",
    "NEWGAME_SPRINT_MAP",
    "NEWGAME_LOG_LEVEL",
)


def _is_e2e_test(request: pytest.FixtureRequest) -> bool:
    return "tests/e2e/" in str(request.node.fspath).replace("\\", "/")


@pytest.fixture(autouse=True)
def isolated_newgame_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in NEWGAME_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def e2e_options_file(
    isolated_newgame_env: None,
    request: pytest.FixtureRequest,
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Runs after the environment is cleared so the e2e paths survive."""
    if not _is_e2e_test(request):
        return

    monkeypatch.setenv("NEWGAME_OPTIONS_PATH", str(tmp_path / "newgame_options.json"))
    monkeypatch.setenv("NEWGAME_SAVE_DIR", str(tmp_path / "saves"))
    monkeypatch.setattr("newgame.__main__.load_dotenv", lambda *_args, **_kwargs: False)
    monkeypatch.setattr("newgame.presentation.menu_controls.clear_screen", lambda: None)
    monkeypatch.setattr("newgame.presentation.newgame_ui.clear_screen", lambda: None)
