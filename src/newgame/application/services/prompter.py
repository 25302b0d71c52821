from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence

from newgame.application.dtos import (
    CharacterSummaryView,
    JobOptionView,
    MapOptionView,
    SpeciesOptionView,
    WeaponOptionView,
)
from newgame.domain.models.character_options import CharacterPreset, WeaponChoice
from newgame.domain.models.newgame import CharacterRequest, ResolvedCharacter


class MenuAction(str, Enum):
    CHOOSE = "choose"
    RANDOM = "random"
    VIABLE = "viable"
    RANDOM_CHARACTER = "random_character"
    VIABLE_CHARACTER = "viable_character"
    DEFAULT_CHOICE = "default_choice"
    PICK_OTHER_FIRST = "pick_other_first"
    CLEAR = "clear"
    BACK = "back"
    CANCEL = "cancel"
    QUIT = "quit"


class ConfirmResult(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    QUIT = "quit"


@dataclass(frozen=True)
class MenuSelection:
    action: MenuAction
    value: Any = None

    @classmethod
    def choose(cls, value: Any) -> "MenuSelection":
        return cls(MenuAction.CHOOSE, value)


class NewGamePrompter(ABC):
    """Interactive side of the new-game flow.

    Every call blocks until the player answers. Option lists arrive already
    filtered: BANNED values are never offered.
    """

    @abstractmethod
    def prompt_species(
        self,
        options: List[SpeciesOptionView],
        request: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
    ) -> MenuSelection:
        raise NotImplementedError

    @abstractmethod
    def prompt_job(
        self,
        options: List[JobOptionView],
        request: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
    ) -> MenuSelection:
        raise NotImplementedError

    @abstractmethod
    def prompt_weapon(
        self,
        options: List[WeaponOptionView],
        default_weapon: WeaponChoice,
        resolved: ResolvedCharacter,
    ) -> MenuSelection:
        raise NotImplementedError

    @abstractmethod
    def prompt_map(
        self,
        options: List[MapOptionView],
        resolved: ResolvedCharacter,
        game_type_label: str,
        previous_map: str = "",
    ) -> MenuSelection:
        """Offer DEFAULT_CHOICE only when ``previous_map`` is set."""
        raise NotImplementedError

    @abstractmethod
    def confirm_character(self, summary: CharacterSummaryView) -> ConfirmResult:
        raise NotImplementedError

    @abstractmethod
    def prompt_hints_character(self, presets: Sequence[CharacterPreset]) -> Optional[CharacterPreset]:
        """Return ``None`` to cancel."""
        raise NotImplementedError

    @abstractmethod
    def prompt_name(self, summary: CharacterSummaryView, last_error: str = "") -> Optional[str]:
        """Return ``None`` to cancel; an empty string asks for a generated name."""
        raise NotImplementedError

    @abstractmethod
    def confirm_overwrite(self, name: str) -> bool:
        raise NotImplementedError
