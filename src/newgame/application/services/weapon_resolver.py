from __future__ import annotations

import logging
import random
from typing import List, Optional

from newgame.application.mappers.newgame_mapper import WeaponCandidate, fixup_weapon, to_weapon_option_views
from newgame.application.services.prompter import MenuAction, NewGamePrompter
from newgame.application.services.weighted_resolver import pick_uniform
from newgame.domain.errors import ConfigurationError, InvariantViolation, NewGameAborted
from newgame.domain.models.character_options import Job, RestrictionLevel, Species, Weapon, Wildcard, is_concrete
from newgame.domain.models.newgame import CharacterRequest, ResolvedCharacter
from newgame.domain.repositories import CompatibilityOracle
from newgame.domain.services.compatibility_catalog import (
    MELEE_STARTING_WEAPONS,
    RANGED_STARTING_WEAPONS,
    job_name,
    species_name,
)


logger = logging.getLogger(__name__)

_GOOD_WEAPON_UPGRADES = {
    Weapon.SHORT_SWORD: Weapon.RAPIER,
    Weapon.MACE: Weapon.FLAIL,
    Weapon.HAND_AXE: Weapon.WAR_AXE,
    Weapon.SPEAR: Weapon.TRIDENT,
    Weapon.FALCHION: Weapon.LONG_SWORD,
}


class WeaponResolver:
    """Starting weapon stage, run once species and job are final."""

    def __init__(self, oracle: CompatibilityOracle, rng: Optional[random.Random] = None):
        self.oracle = oracle
        self.rng = rng or random.Random()

    def upgrade(self, weapon: Weapon, job: Job, species: Species) -> Weapon:
        # Small fighters keep the spear: a trident leaves no hand for the shield.
        if weapon == Weapon.SPEAR and job == Job.FIGHTER and self.oracle.species_is_small(species):
            return weapon
        return _GOOD_WEAPON_UPGRADES.get(weapon, weapon)

    def candidates(self, species: Species, job: Job) -> List[WeaponCandidate]:
        if self.oracle.job_gets_ranged_weapons(job):
            base = list(RANGED_STARTING_WEAPONS)
        else:
            base = list(MELEE_STARTING_WEAPONS)
            if self.oracle.job_gets_good_weapons(job):
                base = [self.upgrade(weapon, job, species) for weapon in base]

        rows: List[WeaponCandidate] = []
        for weapon in base:
            restriction = self.oracle.weapon_restriction(weapon, species, job)
            if restriction != RestrictionLevel.BANNED:
                rows.append((weapon, restriction))
        return rows

    def resolve_weapon(
        self,
        request: CharacterRequest,
        resolved: ResolvedCharacter,
        candidates: List[WeaponCandidate],
    ) -> None:
        if resolved.weapon is not None:
            return
        requested = request.weapon
        pool = list(candidates)
        if request.allowed_weapons:
            allowed = set(request.allowed_weapons)
            pool = [row for row in candidates if row[0] in allowed]
            if not pool:
                raise ConfigurationError(
                    "Failed to find legal weapon; none of the allowed weapons suit "
                    f"{species_name(resolved.species)} {job_name(resolved.job)}."
                )
            if requested != Wildcard.VIABLE:
                requested = Wildcard.RANDOM

        if requested == Wildcard.VIABLE:
            count, picked = pick_uniform(pool, lambda row: row[1] == RestrictionLevel.UNRESTRICTED, self.rng)
            if count:
                resolved.weapon = picked[0]
                return
            requested = Wildcard.RANDOM

        if requested == Wildcard.RANDOM:
            count, picked = pick_uniform(pool, rng=self.rng)
            if count:
                logger.debug("Random weapon %s drawn from %d candidate(s)", picked[0], count)
                resolved.weapon = picked[0]
            return

        fixed = fixup_weapon(requested, candidates)
        if is_concrete(fixed):
            resolved.weapon = fixed

    def choose_weapon(
        self,
        request: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
        prompter: NewGamePrompter,
    ) -> bool:
        """Return ``False`` when the player backs out to the character menus."""
        species, job = resolved.species, resolved.job
        if species is None or job is None:
            raise InvariantViolation("Weapon stage needs a resolved species and background.")
        if not self.oracle.species_uses_weapons(species) or not self.oracle.job_has_weapon_choice(job):
            resolved.weapon = None
            return True

        candidates = self.candidates(species, job)
        if not candidates:
            raise InvariantViolation(f"No starting weapon is legal for {species_name(species)} {job_name(job)}.")
        if len(candidates) == 1:
            resolved.weapon = request.weapon = candidates[0][0]
            return True

        self.resolve_weapon(request, resolved, candidates)
        while resolved.weapon is None:
            default_weapon = fixup_weapon(defaults.weapon, candidates)
            options = to_weapon_option_views(species, candidates, default_weapon)
            selection = prompter.prompt_weapon(options, default_weapon, resolved)
            action = selection.action
            if action == MenuAction.QUIT:
                raise NewGameAborted("quit")
            if action == MenuAction.CANCEL:
                raise NewGameAborted("cancel")
            if action == MenuAction.BACK:
                return False
            if action == MenuAction.DEFAULT_CHOICE:
                if default_weapon == Wildcard.UNKNOWN:
                    continue
                request.weapon = default_weapon
            elif action == MenuAction.VIABLE:
                request.weapon = Wildcard.VIABLE
            elif action == MenuAction.RANDOM:
                request.weapon = Wildcard.RANDOM
            elif action == MenuAction.CHOOSE:
                if not is_concrete(fixup_weapon(selection.value, candidates)):
                    logger.debug("Ignoring weapon %r outside the offered list", selection.value)
                    continue
                request.weapon = selection.value
            else:
                raise InvariantViolation(f"Unsupported weapon menu action: {action.value}")
            self.resolve_weapon(request, resolved, candidates)
        return True
