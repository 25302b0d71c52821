from dataclasses import dataclass
from enum import Enum

from newgame.domain.models.character_options import Job, RestrictionLevel, Species, Weapon


class ItemStatus(str, Enum):
    UNKNOWN = "unknown"
    RESTRICTED = "restricted"
    ALLOWED = "allowed"


@dataclass
class SpeciesOptionView:
    species: Species
    name: str
    abbrev: str
    group: str
    status: ItemStatus
    is_default: bool = False


@dataclass
class JobOptionView:
    job: Job
    name: str
    abbrev: str
    group: str
    status: ItemStatus
    is_default: bool = False


@dataclass
class WeaponOptionView:
    weapon: Weapon
    label: str
    restriction: RestrictionLevel
    is_default: bool = False


@dataclass
class MapOptionView:
    name: str
    description: str
    is_default: bool = False


@dataclass
class CharacterSummaryView:
    name: str
    species_name: str
    job_name: str
    weapon_label: str
    map_name: str
    game_type: str
    welcome: str
    prompt_line: str
