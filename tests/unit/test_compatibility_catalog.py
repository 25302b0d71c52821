import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from newgame.domain.models.character_options import Job, RestrictionLevel, Species, Weapon, Wildcard
from newgame.domain.services import compatibility_catalog as catalog
from newgame.domain.services.names import MAX_NAME_LENGTH, is_good_name
from newgame.infrastructure.inmemory.catalog_oracle import CatalogCompatibilityOracle


class CatalogTableTests(unittest.TestCase):
    def test_every_starting_species_has_abbreviation_group_and_recommendations(self) -> None:
        grouped = {species for _, members in catalog.SPECIES_GROUPS for species in members}
        self.assertEqual(set(catalog.SPECIES_ORDER), grouped)
        for species in catalog.SPECIES_ORDER:
            self.assertIn(species, catalog.SPECIES_ABBREVIATIONS)
            self.assertTrue(catalog.RECOMMENDED_JOBS[species])

    def test_every_job_has_abbreviation_and_recommendations(self) -> None:
        self.assertEqual(set(Job), set(catalog.JOB_ORDER))
        for job in catalog.JOB_ORDER:
            self.assertIn(job, catalog.JOB_ABBREVIATIONS)
            self.assertTrue(catalog.RECOMMENDED_SPECIES[job])

    def test_abbreviations_are_unique(self) -> None:
        self.assertEqual(len(catalog.SPECIES_ABBREVIATIONS), len(set(catalog.SPECIES_ABBREVIATIONS.values())))
        self.assertEqual(len(catalog.JOB_ABBREVIATIONS), len(set(catalog.JOB_ABBREVIATIONS.values())))


class RestrictionTests(unittest.TestCase):
    def test_banned_is_symmetric(self) -> None:
        for species in catalog.SPECIES_ORDER:
            for job in catalog.JOB_ORDER:
                self.assertEqual(
                    catalog.job_restriction(species, job) == RestrictionLevel.BANNED,
                    catalog.species_restriction(job, species) == RestrictionLevel.BANNED,
                )

    def test_recommendations_are_directional(self) -> None:
        self.assertEqual(RestrictionLevel.UNRESTRICTED, catalog.job_restriction(Species.HUMAN, Job.CONJURER))
        self.assertEqual(RestrictionLevel.RESTRICTED, catalog.species_restriction(Job.CONJURER, Species.HUMAN))

    def test_known_banned_pairs(self) -> None:
        self.assertEqual(RestrictionLevel.BANNED, catalog.job_restriction(Species.DEMIGOD, Job.CHAOS_KNIGHT))
        self.assertEqual(RestrictionLevel.BANNED, catalog.job_restriction(Species.MUMMY, Job.BERSERKER))
        self.assertNotEqual(RestrictionLevel.BANNED, catalog.job_restriction(Species.MUMMY, Job.CHAOS_KNIGHT))

    def test_weapon_restrictions(self) -> None:
        self.assertEqual(RestrictionLevel.BANNED, catalog.weapon_restriction(Weapon.MACE, Species.FELID, Job.FIGHTER))
        self.assertEqual(
            RestrictionLevel.UNRESTRICTED, catalog.weapon_restriction(Weapon.UNARMED, Species.FELID, Job.FIGHTER)
        )
        self.assertEqual(
            RestrictionLevel.BANNED, catalog.weapon_restriction(Weapon.SHORTBOW, Species.SPRIGGAN, Job.HUNTER)
        )
        self.assertEqual(
            RestrictionLevel.BANNED, catalog.weapon_restriction(Weapon.WAR_AXE, Species.KOBOLD, Job.GLADIATOR)
        )
        self.assertEqual(
            RestrictionLevel.BANNED, catalog.weapon_restriction(Weapon.QUARTERSTAFF, Species.HUMAN, Job.FIGHTER)
        )
        self.assertEqual(
            RestrictionLevel.RESTRICTED, catalog.weapon_restriction(Weapon.UNARMED, Species.HUMAN, Job.GLADIATOR)
        )
        self.assertEqual(
            RestrictionLevel.UNRESTRICTED, catalog.weapon_restriction(Weapon.FLAIL, Species.HUMAN, Job.FIGHTER)
        )

    def test_oracle_mirrors_catalog(self) -> None:
        oracle = CatalogCompatibilityOracle()
        self.assertTrue(oracle.job_gets_ranged_weapons(Job.HUNTER))
        self.assertTrue(oracle.job_gets_good_weapons(Job.GLADIATOR))
        self.assertFalse(oracle.job_has_weapon_choice(Job.WIZARD))
        self.assertFalse(oracle.species_uses_weapons(Species.FELID))
        self.assertTrue(oracle.species_is_small(Species.HALFLING))
        self.assertTrue(oracle.is_starting_species(Species.OCTOPODE))

    def test_oracle_pools_can_be_narrowed(self) -> None:
        oracle = CatalogCompatibilityOracle(species=[Species.HUMAN], jobs=[Job.MONK, Job.WIZARD])
        self.assertEqual((Species.HUMAN,), tuple(oracle.starting_species()))
        self.assertFalse(oracle.is_starting_job(Job.FIGHTER))


class ParsingTests(unittest.TestCase):
    def test_species_lookup_accepts_names_values_and_abbreviations(self) -> None:
        self.assertEqual(Species.DEEP_ELF, catalog.str_to_species("Deep Elf"))
        self.assertEqual(Species.DEEP_ELF, catalog.str_to_species("deep_elf"))
        self.assertEqual(Species.DEEP_ELF, catalog.str_to_species("DE"))
        self.assertIsNone(catalog.str_to_species("dragon"))
        self.assertIsNone(catalog.str_to_species(""))

    def test_job_lookup(self) -> None:
        self.assertEqual(Job.ARCANE_MARKSMAN, catalog.str_to_job("Arcane Marksman"))
        self.assertEqual(Job.HUNTER, catalog.str_to_job("Hu"))
        self.assertEqual(Job.VENOM_MAGE, catalog.str_to_job("venom-mage"))

    def test_weapon_lookup(self) -> None:
        self.assertEqual(Weapon.HAND_CROSSBOW, catalog.str_to_weapon("hand crossbow"))
        self.assertIsNone(catalog.str_to_weapon("banana"))

    def test_parse_combo_forms(self) -> None:
        self.assertEqual((Species.HUMAN, Job.FIGHTER, Wildcard.UNKNOWN), catalog.parse_combo("HuFi"))
        self.assertEqual((Species.HUMAN, Job.HUNTER, Weapon.SHORTBOW), catalog.parse_combo("HuHu.shortbow"))
        self.assertEqual((Species.DEEP_ELF, Job.CONJURER, Wildcard.UNKNOWN), catalog.parse_combo("Deep Elf Conjurer"))
        self.assertEqual(
            (Species.VINE_STALKER, Job.ASSASSIN, Weapon.SHORT_SWORD),
            catalog.parse_combo("Vine Stalker Assassin.short_sword"),
        )

    def test_parse_combo_rejects_unreadable_input(self) -> None:
        self.assertIsNone(catalog.parse_combo("XxYy"))
        self.assertIsNone(catalog.parse_combo("HuFi.banana"))
        self.assertIsNone(catalog.parse_combo("Human"))
        self.assertIsNone(catalog.parse_combo(""))

    def test_display_names(self) -> None:
        self.assertEqual("Hill Orc", catalog.species_name(Species.HILL_ORC))
        self.assertEqual("Gladiator", catalog.job_name(Job.GLADIATOR))
        self.assertEqual("hand axe", catalog.weapon_name(Weapon.HAND_AXE))


class NameRuleTests(unittest.TestCase):
    def test_good_names(self) -> None:
        for name in ("Rin", "Asha the Bold", "O'Neil", "x-1_y.z"):
            self.assertTrue(is_good_name(name), name)

    def test_bad_names(self) -> None:
        for name in (".", "..", " Rin", "Rin ", "a/b", "Rin!", "x" * (MAX_NAME_LENGTH + 1)):
            self.assertFalse(is_good_name(name), name)

    def test_blank_name_depends_on_flag(self) -> None:
        self.assertFalse(is_good_name(""))
        self.assertTrue(is_good_name("", blank_ok=True))


if __name__ == "__main__":
    unittest.main()
