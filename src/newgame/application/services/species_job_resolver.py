from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Optional

from newgame.application.services.weighted_resolver import pick_uniform
from newgame.domain.errors import ConfigurationError, InvariantViolation
from newgame.domain.models.character_options import (
    JobChoice,
    RestrictionLevel,
    SpeciesChoice,
    Wildcard,
    is_concrete,
)
from newgame.domain.models.newgame import CharacterRequest, ResolvedCharacter
from newgame.domain.repositories import CompatibilityOracle
from newgame.domain.services.compatibility_catalog import job_name, species_name


logger = logging.getLogger(__name__)


class ResolutionOrder(str, Enum):
    SPECIES_FIRST = "species_first"
    JOB_FIRST = "job_first"


class ResolutionState(str, Enum):
    NEEDS_SPECIES = "needs_species"
    NEEDS_JOB = "needs_job"
    NEEDS_BOTH = "needs_both"
    RESOLVED = "resolved"


def resolution_state(resolved: ResolvedCharacter) -> ResolutionState:
    if resolved.species is None and resolved.job is None:
        return ResolutionState.NEEDS_BOTH
    if resolved.species is None:
        return ResolutionState.NEEDS_SPECIES
    if resolved.job is None:
        return ResolutionState.NEEDS_JOB
    return ResolutionState.RESOLVED


def resolution_order(
    requested_species: SpeciesChoice,
    requested_job: JobChoice,
    rng: Optional[random.Random] = None,
) -> ResolutionOrder:
    """Recommendations only make sense once the other field is known, so a
    lone VIABLE field is resolved last. Otherwise the order is a coin flip."""
    species_viable = requested_species == Wildcard.VIABLE
    job_viable = requested_job == Wildcard.VIABLE
    if job_viable and not species_viable:
        return ResolutionOrder.SPECIES_FIRST
    if species_viable and not job_viable:
        return ResolutionOrder.JOB_FIRST
    source = rng or random.Random()
    return ResolutionOrder.SPECIES_FIRST if source.random() < 0.5 else ResolutionOrder.JOB_FIRST


def force_allow_lists(request: CharacterRequest) -> None:
    """A non-empty allow-list turns the field into a random draw unless it asks for VIABLE."""
    if request.allowed_species and request.species != Wildcard.VIABLE:
        request.species = Wildcard.RANDOM
    if request.allowed_jobs and request.job != Wildcard.VIABLE:
        request.job = Wildcard.RANDOM
    if request.allowed_weapons and request.weapon != Wildcard.VIABLE:
        request.weapon = Wildcard.RANDOM


class SpeciesJobResolver:
    """Fills the species and job of a resolved character from a request.

    Resolution only ever fills ``None`` fields, so running it again on a
    resolved character is a no-op.
    """

    def __init__(self, oracle: CompatibilityOracle, rng: Optional[random.Random] = None):
        self.oracle = oracle
        self.rng = rng or random.Random()

    def resolve_species(self, request: CharacterRequest, resolved: ResolvedCharacter) -> None:
        if resolved.species is not None:
            return
        requested = request.species
        if is_concrete(requested):
            resolved.species = requested
            return
        if requested == Wildcard.UNKNOWN:
            return

        allowed = set(request.allowed_species)
        pool = [species for species in self.oracle.starting_species() if not allowed or species in allowed]
        job = resolved.job

        if requested == Wildcard.VIABLE and job is not None:
            count, picked = pick_uniform(
                pool,
                lambda species: self.oracle.species_restriction(job, species) == RestrictionLevel.UNRESTRICTED,
                self.rng,
            )
            if count:
                logger.debug("Recommended species %s drawn from %d for %s", picked, count, job)
                resolved.species = picked
                return

        def not_banned(species) -> bool:
            return self.oracle.species_restriction(job, species) != RestrictionLevel.BANNED

        count, picked = pick_uniform(pool, not_banned if job is not None else None, self.rng)
        if count == 0:
            target = f" for {job_name(job)}" if job is not None else ""
            raise ConfigurationError(f"Failed to find legal species{target}; the allowed species admit no character.")
        logger.debug("Random species %s drawn from %d candidate(s)", picked, count)
        resolved.species = picked

    def resolve_job(self, request: CharacterRequest, resolved: ResolvedCharacter) -> None:
        if resolved.job is not None:
            return
        requested = request.job
        if is_concrete(requested):
            resolved.job = requested
            return
        if requested == Wildcard.UNKNOWN:
            return

        allowed = set(request.allowed_jobs)
        pool = [job for job in self.oracle.starting_jobs() if not allowed or job in allowed]
        species = resolved.species

        if requested == Wildcard.VIABLE and species is not None:
            count, picked = pick_uniform(
                pool,
                lambda job: self.oracle.restriction(species, job) == RestrictionLevel.UNRESTRICTED,
                self.rng,
            )
            if count:
                logger.debug("Recommended job %s drawn from %d for %s", picked, count, species)
                resolved.job = picked
                return

        def not_banned(job) -> bool:
            return self.oracle.restriction(species, job) != RestrictionLevel.BANNED

        count, picked = pick_uniform(pool, not_banned if species is not None else None, self.rng)
        if count == 0:
            target = f" for {species_name(species)}" if species is not None else ""
            raise ConfigurationError(f"Failed to find legal background{target}; the allowed jobs admit no character.")
        logger.debug("Random job %s drawn from %d candidate(s)", picked, count)
        resolved.job = picked

    def resolve_species_job(self, request: CharacterRequest, resolved: ResolvedCharacter) -> ResolutionOrder:
        # Concrete requests are taken first so random draws are filtered against them.
        if is_concrete(request.species):
            self.resolve_species(request, resolved)
        if is_concrete(request.job):
            self.resolve_job(request, resolved)

        order = resolution_order(request.species, request.job, self.rng)
        if order == ResolutionOrder.SPECIES_FIRST:
            self.resolve_species(request, resolved)
            self.resolve_job(request, resolved)
        else:
            self.resolve_job(request, resolved)
            self.resolve_species(request, resolved)
        return order

    def check_final(self, resolved: ResolvedCharacter, *, explicit: bool = False) -> None:
        """Raise when the pair is BANNED.

        ``explicit`` marks a pair requested verbatim by startup configuration,
        which is a configuration error rather than a broken collaborator.
        """
        if resolved.species is None or resolved.job is None:
            raise InvariantViolation("Species and background must be resolved before the final check.")
        if self.oracle.restriction(resolved.species, resolved.job) != RestrictionLevel.BANNED:
            return
        message = (
            "Incompatible species and background "
            f"({species_name(resolved.species)} {job_name(resolved.job)}) selected."
        )
        if explicit:
            raise ConfigurationError(message)
        raise InvariantViolation(message)
