from dataclasses import dataclass

from newgame.domain.models.character_options import Job, Species
from newgame.domain.models.newgame import CharacterRequest, ResolvedCharacter


@dataclass
class CharacterRolled:
    species: Species
    job: Job
    attempt: int


@dataclass
class WeaponChoiceAborted:
    species: Species
    job: Job


@dataclass
class NewGameChosen:
    character: ResolvedCharacter
    choice: CharacterRequest
