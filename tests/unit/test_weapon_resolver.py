import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from newgame.application.services.prompter import MenuAction, MenuSelection, NewGamePrompter
from newgame.application.services.weapon_resolver import WeaponResolver
from newgame.domain.errors import ConfigurationError, InvariantViolation, NewGameAborted
from newgame.domain.models.character_options import Job, RestrictionLevel, Species, Weapon, Wildcard
from newgame.domain.models.newgame import CharacterRequest, ResolvedCharacter
from newgame.infrastructure.inmemory.catalog_oracle import CatalogCompatibilityOracle


class _StubWeaponPrompter(NewGamePrompter):
    def __init__(self, answers=None) -> None:
        self.answers = list(answers or [])
        self.weapon_calls = []

    def prompt_weapon(self, options, default_weapon, resolved):
        self.weapon_calls.append(([row.weapon for row in options], default_weapon))
        if not self.answers:
            raise AssertionError("weapon prompt was not expected")
        return self.answers.pop(0)

    def prompt_species(self, options, request, resolved, defaults):
        raise AssertionError("species prompt was not expected")

    def prompt_job(self, options, request, resolved, defaults):
        raise AssertionError("job prompt was not expected")

    def prompt_map(self, options, resolved, game_type_label, previous_map=""):
        raise AssertionError("map prompt was not expected")

    def confirm_character(self, summary):
        raise AssertionError("confirmation was not expected")

    def prompt_hints_character(self, presets):
        raise AssertionError("hints prompt was not expected")

    def prompt_name(self, summary, last_error=""):
        raise AssertionError("name prompt was not expected")

    def confirm_overwrite(self, name):
        raise AssertionError("overwrite prompt was not expected")


class _OnlyMaceOracle(CatalogCompatibilityOracle):
    def weapon_restriction(self, weapon, species, job):
        return RestrictionLevel.RESTRICTED if weapon == Weapon.MACE else RestrictionLevel.BANNED


class _NoWeaponsOracle(CatalogCompatibilityOracle):
    def weapon_restriction(self, weapon, species, job):
        return RestrictionLevel.BANNED


def _resolved(species, job) -> ResolvedCharacter:
    return ResolvedCharacter(species=species, job=job)


class WeaponCandidateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.resolver = WeaponResolver(CatalogCompatibilityOracle(), random.Random(1))

    def test_fighter_gets_upgraded_weapons_without_quarterstaff(self) -> None:
        weapons = [weapon for weapon, _ in self.resolver.candidates(Species.HUMAN, Job.FIGHTER)]
        self.assertEqual(
            [Weapon.RAPIER, Weapon.FLAIL, Weapon.WAR_AXE, Weapon.TRIDENT, Weapon.LONG_SWORD, Weapon.UNARMED],
            weapons,
        )

    def test_small_fighter_keeps_spear_and_loses_war_axe(self) -> None:
        weapons = [weapon for weapon, _ in self.resolver.candidates(Species.HALFLING, Job.FIGHTER)]
        self.assertEqual([Weapon.RAPIER, Weapon.FLAIL, Weapon.SPEAR, Weapon.LONG_SWORD, Weapon.UNARMED], weapons)

    def test_small_gladiator_still_gets_trident(self) -> None:
        weapons = [weapon for weapon, _ in self.resolver.candidates(Species.KOBOLD, Job.GLADIATOR)]
        self.assertIn(Weapon.TRIDENT, weapons)
        self.assertNotIn(Weapon.SPEAR, weapons)

    def test_berserker_gets_plain_melee_weapons(self) -> None:
        weapons = [weapon for weapon, _ in self.resolver.candidates(Species.HILL_ORC, Job.BERSERKER)]
        self.assertEqual(
            [
                Weapon.SHORT_SWORD,
                Weapon.MACE,
                Weapon.HAND_AXE,
                Weapon.SPEAR,
                Weapon.FALCHION,
                Weapon.QUARTERSTAFF,
                Weapon.UNARMED,
            ],
            weapons,
        )

    def test_tiny_hunter_cannot_start_with_a_shortbow(self) -> None:
        weapons = [weapon for weapon, _ in self.resolver.candidates(Species.SPRIGGAN, Job.HUNTER)]
        self.assertEqual([Weapon.THROWN, Weapon.HUNTING_SLING, Weapon.HAND_CROSSBOW], weapons)

    def test_candidates_carry_their_restriction(self) -> None:
        rows = dict(self.resolver.candidates(Species.TROLL, Job.BERSERKER))
        self.assertEqual(RestrictionLevel.UNRESTRICTED, rows[Weapon.UNARMED])
        self.assertEqual(RestrictionLevel.RESTRICTED, rows[Weapon.SHORT_SWORD])


class ChooseWeaponTests(unittest.TestCase):
    def setUp(self) -> None:
        self.oracle = CatalogCompatibilityOracle()

    def _choose(self, request, resolved, prompter=None, oracle=None, defaults=None, seed=1):
        resolver = WeaponResolver(oracle or self.oracle, random.Random(seed))
        prompter = prompter or _StubWeaponPrompter()
        result = resolver.choose_weapon(request, resolved, defaults or CharacterRequest(), prompter)
        return result, prompter

    def test_felid_takes_no_weapon_and_never_prompts(self) -> None:
        resolved = _resolved(Species.FELID, Job.FIGHTER)
        result, prompter = self._choose(CharacterRequest(), resolved)

        self.assertTrue(result)
        self.assertIsNone(resolved.weapon)
        self.assertEqual([], prompter.weapon_calls)

    def test_job_without_weapon_choice_takes_no_weapon(self) -> None:
        resolved = _resolved(Species.HUMAN, Job.WIZARD)
        result, _ = self._choose(CharacterRequest(weapon=Weapon.FLAIL), resolved)

        self.assertTrue(result)
        self.assertIsNone(resolved.weapon)

    def test_single_candidate_is_assigned_without_prompt(self) -> None:
        request = CharacterRequest()
        resolved = _resolved(Species.HUMAN, Job.BERSERKER)
        result, prompter = self._choose(request, resolved, oracle=_OnlyMaceOracle())

        self.assertTrue(result)
        self.assertEqual(Weapon.MACE, resolved.weapon)
        self.assertEqual(Weapon.MACE, request.weapon)
        self.assertEqual([], prompter.weapon_calls)

    def test_no_legal_candidate_is_an_invariant_violation(self) -> None:
        with self.assertRaises(InvariantViolation):
            self._choose(CharacterRequest(), _resolved(Species.HUMAN, Job.BERSERKER), oracle=_NoWeaponsOracle())

    def test_concrete_weapon_in_list_is_used(self) -> None:
        resolved = _resolved(Species.HUMAN, Job.FIGHTER)
        result, prompter = self._choose(CharacterRequest(weapon=Weapon.FLAIL), resolved)

        self.assertTrue(result)
        self.assertEqual(Weapon.FLAIL, resolved.weapon)
        self.assertEqual([], prompter.weapon_calls)

    def test_concrete_weapon_outside_list_prompts(self) -> None:
        resolved = _resolved(Species.HUMAN, Job.FIGHTER)
        prompter = _StubWeaponPrompter([MenuSelection.choose(Weapon.TRIDENT)])
        result, _ = self._choose(CharacterRequest(weapon=Weapon.MACE), resolved, prompter=prompter)

        self.assertTrue(result)
        self.assertEqual(Weapon.TRIDENT, resolved.weapon)
        self.assertEqual(1, len(prompter.weapon_calls))
        self.assertNotIn(Weapon.QUARTERSTAFF, prompter.weapon_calls[0][0])

    def test_viable_weapon_is_unrestricted(self) -> None:
        for seed in range(30):
            resolved = _resolved(Species.HUMAN, Job.FIGHTER)
            self._choose(CharacterRequest(weapon=Wildcard.VIABLE), resolved, seed=seed)
            self.assertEqual(
                RestrictionLevel.UNRESTRICTED,
                self.oracle.weapon_restriction(resolved.weapon, Species.HUMAN, Job.FIGHTER),
            )

    def test_random_weapon_is_never_banned(self) -> None:
        for seed in range(50):
            resolved = _resolved(Species.SPRIGGAN, Job.HUNTER)
            self._choose(CharacterRequest(weapon=Wildcard.RANDOM), resolved, seed=seed)
            self.assertNotEqual(Weapon.SHORTBOW, resolved.weapon)
            self.assertIsNotNone(resolved.weapon)

    def test_weapon_allow_list_restricts_the_draw(self) -> None:
        request = CharacterRequest(weapon=Weapon.RAPIER, allowed_weapons=[Weapon.FLAIL, Weapon.SPEAR])
        resolved = _resolved(Species.HUMAN, Job.FIGHTER)
        self._choose(request, resolved)

        self.assertEqual(Weapon.FLAIL, resolved.weapon)

    def test_weapon_allow_list_without_legal_weapon_is_a_configuration_error(self) -> None:
        request = CharacterRequest(weapon=Wildcard.RANDOM, allowed_weapons=[Weapon.QUARTERSTAFF])
        with self.assertRaises(ConfigurationError):
            self._choose(request, _resolved(Species.HUMAN, Job.FIGHTER))

    def test_back_reports_abort(self) -> None:
        resolved = _resolved(Species.HUMAN, Job.FIGHTER)
        prompter = _StubWeaponPrompter([MenuSelection(MenuAction.BACK)])
        result, _ = self._choose(CharacterRequest(), resolved, prompter=prompter)

        self.assertFalse(result)
        self.assertIsNone(resolved.weapon)

    def test_quit_and_cancel_raise_aborted(self) -> None:
        for action, reason in ((MenuAction.QUIT, "quit"), (MenuAction.CANCEL, "cancel")):
            prompter = _StubWeaponPrompter([MenuSelection(action)])
            with self.assertRaises(NewGameAborted) as ctx:
                self._choose(CharacterRequest(), _resolved(Species.HUMAN, Job.FIGHTER), prompter=prompter)
            self.assertEqual(reason, ctx.exception.reason)

    def test_default_choice_without_default_reprompts(self) -> None:
        prompter = _StubWeaponPrompter(
            [MenuSelection(MenuAction.DEFAULT_CHOICE), MenuSelection.choose(Weapon.LONG_SWORD)]
        )
        resolved = _resolved(Species.HUMAN, Job.FIGHTER)
        self._choose(CharacterRequest(), resolved, prompter=prompter)

        self.assertEqual(2, len(prompter.weapon_calls))
        self.assertEqual(Weapon.LONG_SWORD, resolved.weapon)

    def test_default_choice_uses_previous_weapon(self) -> None:
        prompter = _StubWeaponPrompter([MenuSelection(MenuAction.DEFAULT_CHOICE)])
        resolved = _resolved(Species.HUMAN, Job.FIGHTER)
        request = CharacterRequest()
        self._choose(request, resolved, prompter=prompter, defaults=CharacterRequest(weapon=Weapon.WAR_AXE))

        self.assertEqual(Weapon.WAR_AXE, prompter.weapon_calls[0][1])
        self.assertEqual(Weapon.WAR_AXE, resolved.weapon)
        self.assertEqual(Weapon.WAR_AXE, request.weapon)

    def test_previous_weapon_outside_list_is_not_offered_as_default(self) -> None:
        prompter = _StubWeaponPrompter([MenuSelection.choose(Weapon.RAPIER)])
        resolved = _resolved(Species.HUMAN, Job.FIGHTER)
        self._choose(CharacterRequest(), resolved, prompter=prompter, defaults=CharacterRequest(weapon=Weapon.MACE))

        self.assertEqual(Wildcard.UNKNOWN, prompter.weapon_calls[0][1])

    def test_unoffered_weapon_choice_reprompts(self) -> None:
        prompter = _StubWeaponPrompter([MenuSelection.choose(Weapon.QUARTERSTAFF), MenuSelection(MenuAction.RANDOM)])
        resolved = _resolved(Species.HUMAN, Job.FIGHTER)
        request = CharacterRequest()
        self._choose(request, resolved, prompter=prompter)

        self.assertEqual(2, len(prompter.weapon_calls))
        self.assertEqual(Wildcard.RANDOM, request.weapon)
        self.assertNotEqual(Weapon.QUARTERSTAFF, resolved.weapon)

    def test_missing_species_is_an_invariant_violation(self) -> None:
        with self.assertRaises(InvariantViolation):
            self._choose(CharacterRequest(), ResolvedCharacter(job=Job.FIGHTER))


if __name__ == "__main__":
    unittest.main()
