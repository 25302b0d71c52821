from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class Wildcard(str, Enum):
    UNKNOWN = "unknown"
    RANDOM = "random"
    VIABLE = "viable"


class RestrictionLevel(str, Enum):
    UNRESTRICTED = "unrestricted"
    RESTRICTED = "restricted"
    BANNED = "banned"


class GameType(str, Enum):
    NORMAL = "normal"
    TUTORIAL = "tutorial"
    HINTS = "hints"
    SPRINT = "sprint"

    @classmethod
    def normalize(cls, value: str | None) -> "GameType":
        raw = str(value or "").strip().lower()
        for item in cls:
            if item.value == raw:
                return item
        return cls.NORMAL


class Species(str, Enum):
    HUMAN = "human"
    DEEP_ELF = "deep_elf"
    DEEP_DWARF = "deep_dwarf"
    HILL_ORC = "hill_orc"
    HALFLING = "halfling"
    KOBOLD = "kobold"
    SPRIGGAN = "spriggan"
    OGRE = "ogre"
    TROLL = "troll"
    NAGA = "naga"
    CENTAUR = "centaur"
    MERFOLK = "merfolk"
    MINOTAUR = "minotaur"
    TENGU = "tengu"
    DRACONIAN = "draconian"
    GARGOYLE = "gargoyle"
    FORMICID = "formicid"
    BARACHI = "barachi"
    GNOLL = "gnoll"
    VINE_STALKER = "vine_stalker"
    DEMIGOD = "demigod"
    DEMONSPAWN = "demonspawn"
    MUMMY = "mummy"
    GHOUL = "ghoul"
    VAMPIRE = "vampire"
    FELID = "felid"
    OCTOPODE = "octopode"


class Job(str, Enum):
    FIGHTER = "fighter"
    GLADIATOR = "gladiator"
    MONK = "monk"
    HUNTER = "hunter"
    ASSASSIN = "assassin"
    ARTIFICER = "artificer"
    WANDERER = "wanderer"
    BERSERKER = "berserker"
    ABYSSAL_KNIGHT = "abyssal_knight"
    CHAOS_KNIGHT = "chaos_knight"
    SKALD = "skald"
    TRANSMUTER = "transmuter"
    WARPER = "warper"
    ARCANE_MARKSMAN = "arcane_marksman"
    ENCHANTER = "enchanter"
    WIZARD = "wizard"
    CONJURER = "conjurer"
    SUMMONER = "summoner"
    NECROMANCER = "necromancer"
    FIRE_ELEMENTALIST = "fire_elementalist"
    ICE_ELEMENTALIST = "ice_elementalist"
    AIR_ELEMENTALIST = "air_elementalist"
    EARTH_ELEMENTALIST = "earth_elementalist"
    VENOM_MAGE = "venom_mage"


class Weapon(str, Enum):
    THROWN = "thrown"
    HUNTING_SLING = "hunting_sling"
    SHORTBOW = "shortbow"
    HAND_CROSSBOW = "hand_crossbow"
    SHORT_SWORD = "short_sword"
    RAPIER = "rapier"
    MACE = "mace"
    FLAIL = "flail"
    HAND_AXE = "hand_axe"
    WAR_AXE = "war_axe"
    SPEAR = "spear"
    TRIDENT = "trident"
    FALCHION = "falchion"
    LONG_SWORD = "long_sword"
    QUARTERSTAFF = "quarterstaff"
    UNARMED = "unarmed"


SpeciesChoice = Union[Species, Wildcard]
JobChoice = Union[Job, Wildcard]
WeaponChoice = Union[Weapon, Wildcard]


def is_concrete(value) -> bool:
    return value is not None and not isinstance(value, Wildcard)


@dataclass(frozen=True)
class ScenarioMap:
    name: str
    description: str = ""
    order: int = 0
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def desc_or_name(self) -> str:
        return self.description or self.name


@dataclass(frozen=True)
class CharacterPreset:
    species: Species
    job: Job
    weapon: Optional[Weapon] = None
    label: str = ""
