from __future__ import annotations

import logging
import random
from typing import List, Optional

from newgame.application.mappers.newgame_mapper import to_map_option_views
from newgame.application.services.prompter import MenuAction, NewGamePrompter
from newgame.application.services.weighted_resolver import pick_uniform
from newgame.domain.errors import ConfigurationError, InvariantViolation, NewGameAborted
from newgame.domain.models.character_options import GameType, ScenarioMap
from newgame.domain.models.newgame import CharacterRequest, ResolvedCharacter
from newgame.domain.repositories import ScenarioMapRepository


logger = logging.getLogger(__name__)

RANDOM_MAP = "random"


def sort_maps(maps: List[ScenarioMap]) -> List[ScenarioMap]:
    return sorted(maps, key=lambda row: (row.order, row.desc_or_name()))


def previous_map_choice(request: CharacterRequest, defaults: CharacterRequest) -> str:
    """The stored sprint map, when the stored choice can be replayed as a whole."""
    if request.game_type != GameType.SPRINT or defaults.game_type != GameType.SPRINT:
        return ""
    if not defaults.map_name or not defaults.char_defined():
        return ""
    return defaults.map_name


class ScenarioMapResolver:
    def __init__(
        self,
        map_repo: ScenarioMapRepository,
        rng: Optional[random.Random] = None,
        sprint_map: str = "",
    ):
        self.map_repo = map_repo
        self.rng = rng or random.Random()
        self.sprint_map = str(sprint_map or "").strip()

    def maps_for(self, game_type: GameType) -> List[ScenarioMap]:
        maps = sort_maps(self.map_repo.find_maps_for_tag(game_type.value))
        if not maps:
            raise ConfigurationError(f"No {game_type.value} maps found.")
        return maps

    def resolve_map(self, request: CharacterRequest, resolved: ResolvedCharacter, maps: List[ScenarioMap]) -> None:
        if request.map_name in ("", RANDOM_MAP):
            _, picked = pick_uniform(maps, rng=self.rng)
            resolved.map_name = picked.name
            logger.debug("Random %s map %s", request.game_type.value, picked.name)
            return
        resolved.map_name = request.map_name

    def choose_map(
        self,
        request: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
        prompter: NewGamePrompter,
    ) -> None:
        maps = self.maps_for(request.game_type)
        if not request.map_name:
            if request.game_type == GameType.SPRINT and self.sprint_map:
                request.map_name = self.sprint_map
            elif len(maps) > 1:
                self._prompt_map(request, resolved, defaults, prompter, maps)
            else:
                request.map_name = maps[0].name
        self.resolve_map(request, resolved, maps)

    def _prompt_map(
        self,
        request: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
        prompter: NewGamePrompter,
        maps: List[ScenarioMap],
    ) -> None:
        label = "lessons" if request.game_type == GameType.TUTORIAL else "maps"
        previous_map = previous_map_choice(request, defaults)
        views = to_map_option_views(maps, defaults.map_name)
        while True:
            selection = prompter.prompt_map(views, resolved, label, previous_map=previous_map)
            action = selection.action
            if action == MenuAction.QUIT:
                raise NewGameAborted("quit")
            if action == MenuAction.CANCEL:
                raise NewGameAborted("cancel")
            if action == MenuAction.CHOOSE:
                names = {row.name for row in maps}
                if selection.value not in names:
                    raise InvariantViolation(f"Map prompt returned an unknown map: {selection.value!r}")
                request.map_name = selection.value
            elif action == MenuAction.DEFAULT_CHOICE:
                # Nothing stored to replay: keep the request and ask again.
                if not previous_map:
                    logger.debug("Ignoring previous map choice; no stored sprint character")
                    continue
                request.apply_defaults(defaults)
                resolved.clear_character()
            elif action in (MenuAction.RANDOM, MenuAction.BACK):
                request.map_name = ""
            else:
                raise InvariantViolation(f"Unsupported map menu action: {action.value}")
            return
