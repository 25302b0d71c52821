import copy
from dataclasses import dataclass, field
from typing import List, Optional

from newgame.domain.models.character_options import (
    GameType,
    Job,
    JobChoice,
    Species,
    SpeciesChoice,
    Weapon,
    WeaponChoice,
    Wildcard,
)


@dataclass
class CharacterRequest:
    """What the player (or startup configuration) asked for.

    Fields may hold wildcards. Resolution reads this record and never loses it,
    so the original request can be reapplied after a reroll.
    """

    name: str = ""
    game_type: GameType = GameType.NORMAL
    species: SpeciesChoice = Wildcard.UNKNOWN
    job: JobChoice = Wildcard.UNKNOWN
    weapon: WeaponChoice = Wildcard.UNKNOWN
    map_name: str = ""
    fully_random: bool = False
    allowed_species: List[Species] = field(default_factory=list)
    allowed_jobs: List[Job] = field(default_factory=list)
    allowed_weapons: List[Weapon] = field(default_factory=list)
    allowed_combos: List[str] = field(default_factory=list)

    def char_defined(self) -> bool:
        return self.species != Wildcard.UNKNOWN and self.job != Wildcard.UNKNOWN

    def clear_character(self) -> None:
        self.species = Wildcard.UNKNOWN
        self.job = Wildcard.UNKNOWN
        self.weapon = Wildcard.UNKNOWN

    def clear_allow_lists(self) -> None:
        self.allowed_species = []
        self.allowed_jobs = []
        self.allowed_weapons = []
        self.allowed_combos = []

    def snapshot(self) -> "CharacterRequest":
        return copy.deepcopy(self)

    def restore(self, other: "CharacterRequest") -> None:
        for key, value in vars(copy.deepcopy(other)).items():
            setattr(self, key, value)

    def apply_defaults(self, defaults: "CharacterRequest") -> None:
        """Replace every field by ``defaults`` except name and game type."""
        name, game_type = self.name, self.game_type
        self.restore(defaults)
        self.name, self.game_type = name, game_type


@dataclass
class ResolvedCharacter:
    """What has been decided so far. ``None`` marks a field still unresolved."""

    name: str = ""
    game_type: GameType = GameType.NORMAL
    species: Optional[Species] = None
    job: Optional[Job] = None
    weapon: Optional[Weapon] = None
    map_name: str = ""

    def clear_character(self) -> None:
        self.species = None
        self.job = None
        self.weapon = None

    def snapshot(self) -> "ResolvedCharacter":
        return copy.deepcopy(self)

    def restore(self, other: "ResolvedCharacter") -> None:
        self.name = other.name
        self.game_type = other.game_type
        self.species = other.species
        self.job = other.job
        self.weapon = other.weapon
        self.map_name = other.map_name
