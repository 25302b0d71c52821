from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from newgame.domain.models.character_options import Job, RestrictionLevel, ScenarioMap, Species, Weapon
from newgame.domain.models.newgame import CharacterRequest


class CompatibilityOracle(ABC):
    @abstractmethod
    def restriction(self, species: Species, job: Job) -> RestrictionLevel:
        """Restriction of ``job`` as seen from ``species`` (the job menu view)."""
        raise NotImplementedError

    @abstractmethod
    def species_restriction(self, job: Job, species: Species) -> RestrictionLevel:
        """Restriction of ``species`` as seen from ``job`` (the species menu view)."""
        raise NotImplementedError

    @abstractmethod
    def weapon_restriction(self, weapon: Weapon, species: Species, job: Job) -> RestrictionLevel:
        raise NotImplementedError

    @abstractmethod
    def starting_species(self) -> Sequence[Species]:
        raise NotImplementedError

    @abstractmethod
    def starting_jobs(self) -> Sequence[Job]:
        raise NotImplementedError

    @abstractmethod
    def job_gets_ranged_weapons(self, job: Job) -> bool:
        raise NotImplementedError

    @abstractmethod
    def job_gets_good_weapons(self, job: Job) -> bool:
        raise NotImplementedError

    @abstractmethod
    def job_has_weapon_choice(self, job: Job) -> bool:
        raise NotImplementedError

    @abstractmethod
    def species_uses_weapons(self, species: Species) -> bool:
        raise NotImplementedError

    @abstractmethod
    def species_is_small(self, species: Species) -> bool:
        raise NotImplementedError

    def is_starting_species(self, species: Species) -> bool:
        return species in self.starting_species()

    def is_starting_job(self, job: Job) -> bool:
        return job in self.starting_jobs()


class ScenarioMapRepository(ABC):
    @abstractmethod
    def find_maps_for_tag(self, tag: str) -> List[ScenarioMap]:
        raise NotImplementedError


class NewGameOptionsRepository(ABC):
    @abstractmethod
    def load(self) -> Optional[CharacterRequest]:
        raise NotImplementedError

    @abstractmethod
    def save(self, choice: CharacterRequest) -> None:
        raise NotImplementedError


class SaveIndex(ABC):
    @abstractmethod
    def save_exists(self, name: str) -> bool:
        raise NotImplementedError
