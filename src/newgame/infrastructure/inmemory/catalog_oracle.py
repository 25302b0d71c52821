from typing import Iterable, Optional, Sequence

from newgame.domain.models.character_options import Job, RestrictionLevel, Species, Weapon
from newgame.domain.repositories import CompatibilityOracle
from newgame.domain.services import compatibility_catalog as catalog


class CatalogCompatibilityOracle(CompatibilityOracle):
    """Compatibility matrix backed by the built-in catalog tables.

    ``species`` and ``jobs`` narrow the starting pools, which is how a server
    build hides content it does not offer.
    """

    def __init__(self, species: Optional[Iterable[Species]] = None, jobs: Optional[Iterable[Job]] = None):
        self._species = tuple(species) if species is not None else tuple(catalog.SPECIES_ORDER)
        self._jobs = tuple(jobs) if jobs is not None else tuple(catalog.JOB_ORDER)

    def restriction(self, species: Species, job: Job) -> RestrictionLevel:
        return catalog.job_restriction(species, job)

    def species_restriction(self, job: Job, species: Species) -> RestrictionLevel:
        return catalog.species_restriction(job, species)

    def weapon_restriction(self, weapon: Weapon, species: Species, job: Job) -> RestrictionLevel:
        return catalog.weapon_restriction(weapon, species, job)

    def starting_species(self) -> Sequence[Species]:
        return self._species

    def starting_jobs(self) -> Sequence[Job]:
        return self._jobs

    def job_gets_ranged_weapons(self, job: Job) -> bool:
        return job in catalog.RANGED_WEAPON_JOBS

    def job_gets_good_weapons(self, job: Job) -> bool:
        return job in catalog.GOOD_WEAPON_JOBS

    def job_has_weapon_choice(self, job: Job) -> bool:
        return job in catalog.WEAPON_CHOICE_JOBS

    def species_uses_weapons(self, species: Species) -> bool:
        return species not in catalog.NON_WEAPON_SPECIES

    def species_is_small(self, species: Species) -> bool:
        return species in catalog.SMALL_SPECIES
