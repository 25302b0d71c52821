from __future__ import annotations

import logging
import random
from typing import Optional

from newgame.application.mappers.newgame_mapper import (
    to_character_summary_view,
    to_job_option_views,
    to_species_option_views,
)
from newgame.application.services.event_bus import EventBus
from newgame.application.services.prompter import ConfirmResult, MenuAction, MenuSelection, NewGamePrompter
from newgame.application.services.scenario_map_resolver import ScenarioMapResolver
from newgame.application.services.species_job_resolver import (
    ResolutionState,
    SpeciesJobResolver,
    force_allow_lists,
    resolution_state,
)
from newgame.application.services.weapon_resolver import WeaponResolver
from newgame.application.services.weighted_resolver import pick_uniform
from newgame.domain.errors import ConfigurationError, InvariantViolation, NewGameAborted
from newgame.domain.events import CharacterRolled, NewGameChosen, WeaponChoiceAborted
from newgame.domain.models.character_options import (
    CharacterPreset,
    GameType,
    Job,
    RestrictionLevel,
    Species,
    Wildcard,
    is_concrete,
)
from newgame.domain.models.newgame import CharacterRequest, ResolvedCharacter
from newgame.domain.repositories import CompatibilityOracle, SaveIndex, ScenarioMapRepository
from newgame.domain.services.compatibility_catalog import (
    HINTS_CHARACTERS,
    TUTORIAL_CHARACTER,
    job_name,
    parse_combo,
    species_name,
)
from newgame.domain.services.names import is_good_name


logger = logging.getLogger(__name__)

RANDOM_NAME_ATTEMPTS = 100
_SPECIES = "species"
_JOB = "job"
_NEEDS_SPECIES = (ResolutionState.NEEDS_SPECIES, ResolutionState.NEEDS_BOTH)
_NEEDS_JOB = (ResolutionState.NEEDS_JOB, ResolutionState.NEEDS_BOTH)


class NewGameService:
    """Turns a partial new-game request into a complete, legal character.

    Drives map selection for the special modes, the species/job prompts, the
    reroll confirmation for fully random characters, the weapon stage and the
    name prompt. Any cancel raises :class:`NewGameAborted`.
    """

    def __init__(
        self,
        oracle: CompatibilityOracle,
        map_repo: ScenarioMapRepository,
        save_index: SaveIndex,
        prompter: NewGamePrompter,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
        name_generator=None,
        sprint_map: str = "",
    ):
        self.oracle = oracle
        self.save_index = save_index
        self.prompter = prompter
        self.event_bus = event_bus or EventBus()
        self.rng = rng or random.Random()
        self.name_generator = name_generator
        self.species_jobs = SpeciesJobResolver(oracle, self.rng)
        self.weapons = WeaponResolver(oracle, self.rng)
        self.maps = ScenarioMapResolver(map_repo, self.rng, sprint_map=sprint_map)

    def choose_game(self, choice: CharacterRequest, defaults: Optional[CharacterRequest] = None) -> ResolvedCharacter:
        defaults = defaults.snapshot() if defaults is not None else CharacterRequest()
        resolved = ResolvedCharacter(name=choice.name, game_type=choice.game_type, map_name=choice.map_name)

        if choice.game_type in (GameType.SPRINT, GameType.TUTORIAL):
            self.maps.choose_map(choice, resolved, defaults, self.prompter)

        self._choose_char(choice, resolved, defaults)

        resolved.name = choice.name
        resolved.game_type = choice.game_type
        if not choice.name:
            self._choose_name(choice, resolved)
        if not resolved.name:
            raise ConfigurationError("No player name specified.")

        logger.info(
            "New character chosen: %s the %s %s",
            resolved.name,
            species_name(resolved.species),
            job_name(resolved.job),
        )
        self.event_bus.publish(NewGameChosen(character=resolved.snapshot(), choice=choice.snapshot()))
        return resolved

    def _choose_char(self, choice: CharacterRequest, resolved: ResolvedCharacter, defaults: CharacterRequest) -> None:
        pristine = resolved.snapshot()

        if choice.game_type == GameType.TUTORIAL:
            self._apply_preset(choice, TUTORIAL_CHARACTER)
            choice.clear_allow_lists()
        elif choice.game_type == GameType.HINTS:
            preset = self.prompter.prompt_hints_character(HINTS_CHARACTERS)
            if preset is None:
                raise NewGameAborted("cancel")
            self._apply_preset(choice, preset)
            choice.clear_allow_lists()

        explicit_pair = is_concrete(choice.species) and is_concrete(choice.job)
        attempt = 0
        while True:
            attempt_snapshot = choice.snapshot()
            explicit = explicit_pair
            if choice.allowed_combos:
                self._draw_combo(choice)
                explicit = True
            else:
                force_allow_lists(choice)

            self._choose_species_job(choice, resolved, defaults, explicit=explicit)
            attempt += 1
            self.event_bus.publish(CharacterRolled(species=resolved.species, job=resolved.job, attempt=attempt))

            if choice.fully_random:
                verdict = self.prompter.confirm_character(to_character_summary_view(resolved))
                if verdict == ConfirmResult.QUIT:
                    raise NewGameAborted("quit")
                if verdict == ConfirmResult.REJECT:
                    logger.debug("Character %d rejected; rerolling", attempt)
                    resolved.restore(pristine)
                    # A character randomised from the menus keeps its wildcards and rerolls.
                    if attempt_snapshot.fully_random:
                        choice.restore(attempt_snapshot)
                    continue

            if self.weapons.choose_weapon(choice, resolved, defaults, self.prompter):
                self._check_weapon(resolved)
                return

            # Back out of the weapon menu: choose again, keeping name, type and map.
            self.event_bus.publish(WeaponChoiceAborted(species=resolved.species, job=resolved.job))
            defaults = choice.snapshot()
            resolved.restore(pristine)
            choice.restore(
                CharacterRequest(name=choice.name, game_type=choice.game_type, map_name=choice.map_name)
            )
            explicit_pair = False

    @staticmethod
    def _apply_preset(choice: CharacterRequest, preset: CharacterPreset) -> None:
        choice.species = preset.species
        choice.job = preset.job
        choice.weapon = preset.weapon if preset.weapon is not None else Wildcard.UNKNOWN

    def _draw_combo(self, choice: CharacterRequest) -> None:
        legal = []
        for combo in choice.allowed_combos:
            parsed = parse_combo(combo)
            if parsed is None:
                raise ConfigurationError(f"Unrecognized character combo: {combo!r}.")
            species, job, _ = parsed
            if self.oracle.restriction(species, job) != RestrictionLevel.BANNED:
                legal.append(parsed)

        count, picked = pick_uniform(legal, rng=self.rng)
        if count == 0:
            raise ConfigurationError("None of the allowed combos is a legal character.")
        choice.species, choice.job, choice.weapon = picked
        logger.debug("Combo drawn from %d legal combo(s): %s %s", count, picked[0], picked[1])

    def _choose_species_job(
        self,
        choice: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
        *,
        explicit: bool = False,
    ) -> None:
        self.species_jobs.resolve_species_job(choice, resolved)

        # A prompt may reset both fields or switch to a fully random character.
        while resolution_state(resolved) != ResolutionState.RESOLVED:
            if resolution_state(resolved) in _NEEDS_SPECIES:
                self._prompt_choice(_SPECIES, choice, resolved, defaults)
            self.species_jobs.resolve_species_job(choice, resolved)
            if resolution_state(resolved) in _NEEDS_JOB:
                self._prompt_choice(_JOB, choice, resolved, defaults)
            self.species_jobs.resolve_species_job(choice, resolved)

        self.species_jobs.check_final(resolved, explicit=explicit)

    def _prompt_choice(
        self,
        field: str,
        choice: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
    ) -> None:
        while True:
            if field == _SPECIES:
                options = to_species_option_views(self.oracle, resolved, defaults)
                selection = self.prompter.prompt_species(options, choice, resolved, defaults)
            else:
                options = to_job_option_views(self.oracle, resolved, defaults)
                selection = self.prompter.prompt_job(options, choice, resolved, defaults)
            if self._apply_menu_selection(field, selection, choice, resolved, defaults):
                return

    def _apply_menu_selection(
        self,
        field: str,
        selection: MenuSelection,
        choice: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
    ) -> bool:
        """Apply one menu answer; ``False`` means it was ignored and the menu stays open."""
        action = selection.action
        if action == MenuAction.QUIT:
            raise NewGameAborted("quit")
        if action == MenuAction.CANCEL:
            raise NewGameAborted("cancel")

        if action in (MenuAction.RANDOM_CHARACTER, MenuAction.VIABLE_CHARACTER):
            wildcard = Wildcard.VIABLE if action == MenuAction.VIABLE_CHARACTER else Wildcard.RANDOM
            resolved.clear_character()
            choice.fully_random = True
            choice.species = wildcard
            choice.job = wildcard
            return True
        if action == MenuAction.DEFAULT_CHOICE:
            if not defaults.char_defined():
                return False
            resolved.clear_character()
            choice.apply_defaults(defaults)
            return True
        if action == MenuAction.PICK_OTHER_FIRST:
            resolved.species = resolved.job = None
            choice.species = Wildcard.UNKNOWN
            choice.job = Wildcard.UNKNOWN
            return True
        if action in (MenuAction.CLEAR, MenuAction.RANDOM, MenuAction.VIABLE):
            wildcard = {
                MenuAction.CLEAR: Wildcard.UNKNOWN,
                MenuAction.RANDOM: Wildcard.RANDOM,
                MenuAction.VIABLE: Wildcard.VIABLE,
            }[action]
            if field == _SPECIES:
                choice.species = wildcard
                resolved.species = None
            else:
                choice.job = wildcard
                resolved.job = None
            return True
        if action == MenuAction.CHOOSE:
            return self._apply_concrete_choice(field, selection.value, choice, resolved)
        raise InvariantViolation(f"Unsupported {field} menu action: {action.value}")

    def _apply_concrete_choice(
        self,
        field: str,
        value,
        choice: CharacterRequest,
        resolved: ResolvedCharacter,
    ) -> bool:
        if field == _SPECIES:
            if not isinstance(value, Species):
                return False
            if resolved.job is not None and (
                self.oracle.species_restriction(resolved.job, value) == RestrictionLevel.BANNED
            ):
                logger.debug("Ignoring banned species %s for %s", value, resolved.job)
                return False
            choice.species = value
            return True

        if not isinstance(value, Job):
            return False
        if resolved.species is not None and self.oracle.restriction(resolved.species, value) == RestrictionLevel.BANNED:
            logger.debug("Ignoring banned job %s for %s", value, resolved.species)
            return False
        choice.job = value
        return True

    def _check_weapon(self, resolved: ResolvedCharacter) -> None:
        species, job = resolved.species, resolved.job
        takes_weapon = self.oracle.species_uses_weapons(species) and self.oracle.job_has_weapon_choice(job)
        if not takes_weapon:
            return
        if resolved.weapon is None:
            raise InvariantViolation("Weapon stage finished without a weapon.")
        if self.oracle.weapon_restriction(resolved.weapon, species, job) == RestrictionLevel.BANNED:
            raise InvariantViolation(
                f"Banned weapon {resolved.weapon.value} for {species_name(species)} {job_name(job)}."
            )

    def _random_name(self) -> str:
        if self.name_generator is None:
            return ""
        for _ in range(RANDOM_NAME_ATTEMPTS):
            name = self.name_generator.make_name(self.rng)
            if not self.save_index.save_exists(name):
                return name
        return ""

    def _choose_name(self, choice: CharacterRequest, resolved: ResolvedCharacter) -> None:
        last_error = ""
        while True:
            raw = self.prompter.prompt_name(to_character_summary_view(resolved), last_error)
            if raw is None:
                raise NewGameAborted("cancel")
            name = raw.strip()
            if not name:
                name = self._random_name()
                if not name:
                    return
            if not is_good_name(name):
                last_error = "That's a silly name!"
                continue
            if self.save_index.save_exists(name) and not self.prompter.confirm_overwrite(name):
                last_error = ""
                continue
            choice.name = resolved.name = name
            return
