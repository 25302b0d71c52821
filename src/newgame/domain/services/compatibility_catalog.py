from __future__ import annotations

from collections.abc import Mapping, Sequence

from newgame.domain.models.character_options import (
    CharacterPreset,
    Job,
    RestrictionLevel,
    Species,
    Weapon,
    WeaponChoice,
    Wildcard,
)


# Starting species in menu order; also the pool for unconstrained species draws.
SPECIES_ORDER: Sequence[Species] = (
    Species.HUMAN, Species.DEEP_ELF,
    Species.DEEP_DWARF, Species.HILL_ORC,
    Species.HALFLING, Species.KOBOLD,
    Species.SPRIGGAN,
    Species.OGRE, Species.TROLL,
    Species.NAGA, Species.CENTAUR,
    Species.MERFOLK, Species.MINOTAUR,
    Species.TENGU, Species.DRACONIAN,
    Species.GARGOYLE, Species.FORMICID,
    Species.BARACHI, Species.GNOLL,
    Species.VINE_STALKER,
    Species.DEMIGOD, Species.DEMONSPAWN,
    Species.MUMMY, Species.GHOUL,
    Species.VAMPIRE,
    Species.FELID, Species.OCTOPODE,
)

SPECIES_GROUPS: Sequence[tuple[str, Sequence[Species]]] = (
    (
        "Simple",
        (
            Species.HILL_ORC, Species.MINOTAUR, Species.MERFOLK, Species.GARGOYLE,
            Species.DRACONIAN, Species.HALFLING, Species.TROLL, Species.GHOUL,
        ),
    ),
    (
        "Intermediate",
        (
            Species.HUMAN, Species.KOBOLD, Species.DEMONSPAWN, Species.CENTAUR, Species.SPRIGGAN,
            Species.TENGU, Species.DEEP_ELF, Species.OGRE, Species.DEEP_DWARF, Species.GNOLL,
        ),
    ),
    (
        "Advanced",
        (
            Species.VINE_STALKER, Species.VAMPIRE, Species.DEMIGOD, Species.FORMICID, Species.NAGA,
            Species.OCTOPODE, Species.FELID, Species.BARACHI, Species.MUMMY,
        ),
    ),
)

JOB_GROUPS: Sequence[tuple[str, Sequence[Job]]] = (
    ("Warrior", (Job.FIGHTER, Job.GLADIATOR, Job.MONK, Job.HUNTER, Job.ASSASSIN)),
    ("Adventurer", (Job.ARTIFICER, Job.WANDERER)),
    ("Zealot", (Job.BERSERKER, Job.ABYSSAL_KNIGHT, Job.CHAOS_KNIGHT)),
    ("Warrior-mage", (Job.SKALD, Job.TRANSMUTER, Job.WARPER, Job.ARCANE_MARKSMAN, Job.ENCHANTER)),
    (
        "Mage",
        (
            Job.WIZARD, Job.CONJURER, Job.SUMMONER, Job.NECROMANCER,
            Job.FIRE_ELEMENTALIST, Job.ICE_ELEMENTALIST,
            Job.AIR_ELEMENTALIST, Job.EARTH_ELEMENTALIST, Job.VENOM_MAGE,
        ),
    ),
)

JOB_ORDER: Sequence[Job] = tuple(job for _, jobs in JOB_GROUPS for job in jobs)

SPECIES_ABBREVIATIONS: Mapping[Species, str] = {
    Species.HUMAN: "Hu", Species.DEEP_ELF: "DE", Species.DEEP_DWARF: "DD",
    Species.HILL_ORC: "HO", Species.HALFLING: "Ha", Species.KOBOLD: "Ko",
    Species.SPRIGGAN: "Sp", Species.OGRE: "Og", Species.TROLL: "Tr",
    Species.NAGA: "Na", Species.CENTAUR: "Ce", Species.MERFOLK: "Mf",
    Species.MINOTAUR: "Mi", Species.TENGU: "Te", Species.DRACONIAN: "Dr",
    Species.GARGOYLE: "Gr", Species.FORMICID: "Fo", Species.BARACHI: "Ba",
    Species.GNOLL: "Gn", Species.VINE_STALKER: "VS", Species.DEMIGOD: "Dg",
    Species.DEMONSPAWN: "Ds", Species.MUMMY: "Mu", Species.GHOUL: "Gh",
    Species.VAMPIRE: "Vp", Species.FELID: "Fe", Species.OCTOPODE: "Op",
}

JOB_ABBREVIATIONS: Mapping[Job, str] = {
    Job.FIGHTER: "Fi", Job.GLADIATOR: "Gl", Job.MONK: "Mo", Job.HUNTER: "Hu",
    Job.ASSASSIN: "As", Job.ARTIFICER: "Ar", Job.WANDERER: "Wn",
    Job.BERSERKER: "Be", Job.ABYSSAL_KNIGHT: "AK", Job.CHAOS_KNIGHT: "CK",
    Job.SKALD: "Sk", Job.TRANSMUTER: "Tm", Job.WARPER: "Wr",
    Job.ARCANE_MARKSMAN: "AM", Job.ENCHANTER: "En", Job.WIZARD: "Wz",
    Job.CONJURER: "Cj", Job.SUMMONER: "Su", Job.NECROMANCER: "Ne",
    Job.FIRE_ELEMENTALIST: "FE", Job.ICE_ELEMENTALIST: "IE",
    Job.AIR_ELEMENTALIST: "AE", Job.EARTH_ELEMENTALIST: "EE", Job.VENOM_MAGE: "VM",
}

# Jobs each species is good at (what the job menu highlights once a species is known).
RECOMMENDED_JOBS: Mapping[Species, frozenset[Job]] = {
    Species.HUMAN: frozenset({Job.FIGHTER, Job.BERSERKER, Job.CONJURER, Job.NECROMANCER}),
    Species.DEEP_ELF: frozenset({Job.WIZARD, Job.CONJURER, Job.SUMMONER, Job.NECROMANCER,
                                 Job.FIRE_ELEMENTALIST, Job.ICE_ELEMENTALIST, Job.AIR_ELEMENTALIST}),
    Species.DEEP_DWARF: frozenset({Job.FIGHTER, Job.HUNTER, Job.BERSERKER, Job.NECROMANCER, Job.EARTH_ELEMENTALIST}),
    Species.HILL_ORC: frozenset({Job.FIGHTER, Job.MONK, Job.BERSERKER, Job.NECROMANCER, Job.FIRE_ELEMENTALIST}),
    Species.HALFLING: frozenset({Job.FIGHTER, Job.HUNTER, Job.BERSERKER, Job.AIR_ELEMENTALIST}),
    Species.KOBOLD: frozenset({Job.HUNTER, Job.BERSERKER, Job.ARCANE_MARKSMAN, Job.ENCHANTER, Job.CONJURER}),
    Species.SPRIGGAN: frozenset({Job.ENCHANTER, Job.CONJURER, Job.AIR_ELEMENTALIST, Job.VENOM_MAGE}),
    Species.OGRE: frozenset({Job.HUNTER, Job.BERSERKER, Job.ARCANE_MARKSMAN, Job.WIZARD}),
    Species.TROLL: frozenset({Job.MONK, Job.HUNTER, Job.BERSERKER, Job.EARTH_ELEMENTALIST}),
    Species.NAGA: frozenset({Job.BERSERKER, Job.TRANSMUTER, Job.ENCHANTER, Job.VENOM_MAGE}),
    Species.CENTAUR: frozenset({Job.FIGHTER, Job.GLADIATOR, Job.HUNTER, Job.WARPER, Job.ARCANE_MARKSMAN}),
    Species.MERFOLK: frozenset({Job.GLADIATOR, Job.BERSERKER, Job.SKALD, Job.ICE_ELEMENTALIST, Job.VENOM_MAGE}),
    Species.MINOTAUR: frozenset({Job.FIGHTER, Job.GLADIATOR, Job.MONK, Job.HUNTER, Job.BERSERKER}),
    Species.TENGU: frozenset({Job.BERSERKER, Job.CONJURER, Job.SUMMONER, Job.FIRE_ELEMENTALIST, Job.AIR_ELEMENTALIST}),
    Species.DRACONIAN: frozenset({Job.BERSERKER, Job.TRANSMUTER, Job.CONJURER, Job.NECROMANCER, Job.FIRE_ELEMENTALIST}),
    Species.GARGOYLE: frozenset({Job.FIGHTER, Job.MONK, Job.EARTH_ELEMENTALIST}),
    Species.FORMICID: frozenset({Job.FIGHTER, Job.HUNTER, Job.EARTH_ELEMENTALIST, Job.VENOM_MAGE}),
    Species.BARACHI: frozenset({Job.FIGHTER, Job.WANDERER, Job.SKALD, Job.SUMMONER}),
    Species.GNOLL: frozenset({Job.FIGHTER, Job.SKALD, Job.WARPER, Job.ARTIFICER}),
    Species.VINE_STALKER: frozenset({Job.FIGHTER, Job.MONK, Job.ASSASSIN, Job.ENCHANTER}),
    Species.DEMIGOD: frozenset({Job.FIGHTER, Job.GLADIATOR, Job.TRANSMUTER, Job.FIRE_ELEMENTALIST}),
    Species.DEMONSPAWN: frozenset({Job.GLADIATOR, Job.BERSERKER, Job.ABYSSAL_KNIGHT, Job.WIZARD, Job.NECROMANCER}),
    Species.MUMMY: frozenset({Job.WIZARD, Job.CONJURER, Job.NECROMANCER, Job.ICE_ELEMENTALIST, Job.EARTH_ELEMENTALIST}),
    Species.GHOUL: frozenset({Job.GLADIATOR, Job.MONK, Job.BERSERKER, Job.NECROMANCER, Job.ICE_ELEMENTALIST}),
    Species.VAMPIRE: frozenset({Job.GLADIATOR, Job.MONK, Job.ASSASSIN, Job.ENCHANTER, Job.NECROMANCER}),
    Species.FELID: frozenset({Job.BERSERKER, Job.ENCHANTER, Job.TRANSMUTER, Job.ICE_ELEMENTALIST, Job.AIR_ELEMENTALIST}),
    Species.OCTOPODE: frozenset({Job.TRANSMUTER, Job.WIZARD, Job.CONJURER, Job.ICE_ELEMENTALIST, Job.VENOM_MAGE}),
}

# Species each job is good for (what the species menu highlights once a job is known).
# Not the inverse of RECOMMENDED_JOBS: recommendations are directional.
RECOMMENDED_SPECIES: Mapping[Job, frozenset[Species]] = {
    Job.FIGHTER: frozenset({Species.HUMAN, Species.DEEP_DWARF, Species.HILL_ORC, Species.MINOTAUR,
                            Species.GARGOYLE, Species.FORMICID}),
    Job.GLADIATOR: frozenset({Species.CENTAUR, Species.MERFOLK, Species.MINOTAUR, Species.GARGOYLE,
                              Species.GHOUL, Species.DEMONSPAWN}),
    Job.MONK: frozenset({Species.HILL_ORC, Species.TROLL, Species.MINOTAUR, Species.GHOUL, Species.VAMPIRE}),
    Job.HUNTER: frozenset({Species.HALFLING, Species.KOBOLD, Species.OGRE, Species.CENTAUR, Species.FORMICID}),
    Job.ASSASSIN: frozenset({Species.HALFLING, Species.KOBOLD, Species.SPRIGGAN, Species.VINE_STALKER,
                             Species.VAMPIRE}),
    Job.ARTIFICER: frozenset({Species.DEEP_DWARF, Species.KOBOLD, Species.GNOLL, Species.BARACHI}),
    Job.WANDERER: frozenset({Species.HUMAN, Species.BARACHI, Species.GNOLL, Species.DEMIGOD}),
    Job.BERSERKER: frozenset({Species.HILL_ORC, Species.OGRE, Species.TROLL, Species.MERFOLK, Species.MINOTAUR}),
    Job.ABYSSAL_KNIGHT: frozenset({Species.HILL_ORC, Species.MERFOLK, Species.GARGOYLE, Species.DEMONSPAWN}),
    Job.CHAOS_KNIGHT: frozenset({Species.HUMAN, Species.MERFOLK, Species.TENGU, Species.DEMONSPAWN,
                                 Species.VINE_STALKER}),
    Job.SKALD: frozenset({Species.HUMAN, Species.MERFOLK, Species.BARACHI, Species.GNOLL}),
    Job.TRANSMUTER: frozenset({Species.NAGA, Species.DRACONIAN, Species.DEMIGOD, Species.FELID, Species.OCTOPODE}),
    Job.WARPER: frozenset({Species.HUMAN, Species.CENTAUR, Species.TENGU, Species.GNOLL}),
    Job.ARCANE_MARKSMAN: frozenset({Species.KOBOLD, Species.CENTAUR, Species.DEEP_ELF, Species.TENGU}),
    Job.ENCHANTER: frozenset({Species.SPRIGGAN, Species.KOBOLD, Species.NAGA, Species.FELID, Species.VAMPIRE}),
    Job.WIZARD: frozenset({Species.DEEP_ELF, Species.DRACONIAN, Species.MUMMY, Species.OCTOPODE}),
    Job.CONJURER: frozenset({Species.DEEP_ELF, Species.TENGU, Species.DRACONIAN, Species.DEMONSPAWN}),
    Job.SUMMONER: frozenset({Species.DEEP_ELF, Species.TENGU, Species.BARACHI, Species.VINE_STALKER}),
    Job.NECROMANCER: frozenset({Species.DEEP_DWARF, Species.HILL_ORC, Species.DEMONSPAWN, Species.MUMMY}),
    Job.FIRE_ELEMENTALIST: frozenset({Species.DEEP_ELF, Species.HILL_ORC, Species.DRACONIAN, Species.TENGU}),
    Job.ICE_ELEMENTALIST: frozenset({Species.DEEP_ELF, Species.MERFOLK, Species.NAGA, Species.MUMMY}),
    Job.AIR_ELEMENTALIST: frozenset({Species.DEEP_ELF, Species.TENGU, Species.SPRIGGAN, Species.FELID}),
    Job.EARTH_ELEMENTALIST: frozenset({Species.DEEP_DWARF, Species.GARGOYLE, Species.FORMICID, Species.TROLL}),
    Job.VENOM_MAGE: frozenset({Species.SPRIGGAN, Species.NAGA, Species.MERFOLK, Species.OCTOPODE}),
}

BANNED_COMBINATIONS: frozenset[tuple[Species, Job]] = frozenset(
    {
        (Species.DEMIGOD, Job.BERSERKER),
        (Species.DEMIGOD, Job.ABYSSAL_KNIGHT),
        (Species.DEMIGOD, Job.CHAOS_KNIGHT),
        (Species.MUMMY, Job.BERSERKER),
    }
)

WEAPON_CHOICE_JOBS = frozenset(
    {Job.FIGHTER, Job.GLADIATOR, Job.HUNTER, Job.BERSERKER, Job.ABYSSAL_KNIGHT, Job.CHAOS_KNIGHT}
)
RANGED_WEAPON_JOBS = frozenset({Job.HUNTER})
GOOD_WEAPON_JOBS = frozenset({Job.FIGHTER, Job.GLADIATOR})

NON_WEAPON_SPECIES = frozenset({Species.FELID})
SMALL_SPECIES = frozenset({Species.HALFLING, Species.KOBOLD, Species.SPRIGGAN, Species.FELID})
CLAWED_SPECIES = frozenset({Species.TROLL, Species.GHOUL, Species.FELID})
LARGE_ROCK_SPECIES = frozenset({Species.OGRE, Species.TROLL})
TINY_SPECIES = frozenset({Species.SPRIGGAN})

# Two-handed or oversized starting weapons.
SMALL_SPECIES_BANNED_WEAPONS = frozenset({Weapon.WAR_AXE})
TINY_SPECIES_BANNED_WEAPONS = frozenset({Weapon.WAR_AXE, Weapon.SHORTBOW})
# Fighters start with a shield.
SHIELD_BANNED_WEAPONS = frozenset({Weapon.QUARTERSTAFF})

RANGED_STARTING_WEAPONS: Sequence[Weapon] = (
    Weapon.THROWN, Weapon.HUNTING_SLING, Weapon.SHORTBOW, Weapon.HAND_CROSSBOW,
)
MELEE_STARTING_WEAPONS: Sequence[Weapon] = (
    Weapon.SHORT_SWORD, Weapon.MACE, Weapon.HAND_AXE, Weapon.SPEAR,
    Weapon.FALCHION, Weapon.QUARTERSTAFF, Weapon.UNARMED,
)

WEAPON_SKILLS: Mapping[Weapon, str] = {
    Weapon.THROWN: "throwing",
    Weapon.HUNTING_SLING: "slings",
    Weapon.SHORTBOW: "bows",
    Weapon.HAND_CROSSBOW: "crossbows",
    Weapon.SHORT_SWORD: "short_blades",
    Weapon.RAPIER: "short_blades",
    Weapon.MACE: "maces",
    Weapon.FLAIL: "maces",
    Weapon.HAND_AXE: "axes",
    Weapon.WAR_AXE: "axes",
    Weapon.SPEAR: "polearms",
    Weapon.TRIDENT: "polearms",
    Weapon.FALCHION: "long_blades",
    Weapon.LONG_SWORD: "long_blades",
    Weapon.QUARTERSTAFF: "staves",
    Weapon.UNARMED: "unarmed",
}

# Weapon skills a species has good aptitude in; anything else is playable but discouraged.
SPECIES_WEAPON_SKILLS: Mapping[Species, frozenset[str]] = {
    Species.HUMAN: frozenset({"short_blades", "long_blades", "maces", "axes", "polearms", "staves", "bows"}),
    Species.DEEP_ELF: frozenset({"short_blades", "long_blades", "staves", "bows"}),
    Species.DEEP_DWARF: frozenset({"axes", "maces", "crossbows"}),
    Species.HILL_ORC: frozenset({"axes", "maces", "polearms", "long_blades"}),
    Species.HALFLING: frozenset({"short_blades", "slings", "throwing"}),
    Species.KOBOLD: frozenset({"short_blades", "maces", "crossbows", "slings"}),
    Species.SPRIGGAN: frozenset({"short_blades", "slings"}),
    Species.OGRE: frozenset({"maces", "throwing"}),
    Species.TROLL: frozenset({"unarmed", "maces", "throwing"}),
    Species.NAGA: frozenset({"polearms", "staves"}),
    Species.CENTAUR: frozenset({"bows", "polearms", "throwing"}),
    Species.MERFOLK: frozenset({"polearms"}),
    Species.MINOTAUR: frozenset({"axes", "maces", "polearms", "long_blades", "unarmed"}),
    Species.TENGU: frozenset({"short_blades", "long_blades", "polearms"}),
    Species.DRACONIAN: frozenset({"maces", "axes", "long_blades", "unarmed"}),
    Species.GARGOYLE: frozenset({"maces", "staves", "unarmed"}),
    Species.FORMICID: frozenset({"axes", "polearms", "crossbows", "throwing"}),
    Species.BARACHI: frozenset({"maces", "staves", "bows"}),
    Species.GNOLL: frozenset({"short_blades", "long_blades", "maces", "axes", "polearms", "staves",
                              "bows", "crossbows", "slings", "throwing", "unarmed"}),
    Species.VINE_STALKER: frozenset({"short_blades", "long_blades", "axes"}),
    Species.DEMIGOD: frozenset({"long_blades", "maces", "axes", "polearms"}),
    Species.DEMONSPAWN: frozenset({"long_blades", "axes", "maces"}),
    Species.MUMMY: frozenset({"maces", "staves"}),
    Species.GHOUL: frozenset({"unarmed", "axes"}),
    Species.VAMPIRE: frozenset({"short_blades", "long_blades", "unarmed"}),
    Species.FELID: frozenset({"unarmed"}),
    Species.OCTOPODE: frozenset({"short_blades", "maces", "staves"}),
}

TUTORIAL_CHARACTER = CharacterPreset(Species.HUMAN, Job.FIGHTER, Weapon.FLAIL, label="Human Fighter")
HINTS_CHARACTERS: Sequence[CharacterPreset] = (
    CharacterPreset(Species.MINOTAUR, Job.BERSERKER, Weapon.HAND_AXE, label="Minotaur Berserker"),
    CharacterPreset(Species.DEEP_ELF, Job.CONJURER, None, label="Deep Elf Conjurer"),
    CharacterPreset(Species.CENTAUR, Job.HUNTER, Weapon.SHORTBOW, label="Centaur Hunter"),
)

_SPECIAL_NAMES = {
    Species.DEEP_ELF: "Deep Elf",
    Species.DEEP_DWARF: "Deep Dwarf",
    Species.HILL_ORC: "Hill Orc",
    Species.VINE_STALKER: "Vine Stalker",
    Job.ABYSSAL_KNIGHT: "Abyssal Knight",
    Job.CHAOS_KNIGHT: "Chaos Knight",
    Job.ARCANE_MARKSMAN: "Arcane Marksman",
    Job.FIRE_ELEMENTALIST: "Fire Elementalist",
    Job.ICE_ELEMENTALIST: "Ice Elementalist",
    Job.AIR_ELEMENTALIST: "Air Elementalist",
    Job.EARTH_ELEMENTALIST: "Earth Elementalist",
    Job.VENOM_MAGE: "Venom Mage",
}


def _title(value) -> str:
    return _SPECIAL_NAMES.get(value) or value.value.replace("_", " ").title()


def species_name(species: Species) -> str:
    return _title(species)


def job_name(job: Job) -> str:
    return _title(job)


def weapon_name(weapon: Weapon) -> str:
    return weapon.value.replace("_", " ")


def _normalize_token(raw: str | None) -> str:
    return "".join(ch for ch in str(raw or "").strip().lower() if ch.isalnum())


def species_by_abbrev(abbrev: str) -> Species | None:
    for species, code in SPECIES_ABBREVIATIONS.items():
        if code.lower() == str(abbrev or "").strip().lower():
            return species
    return None


def job_by_abbrev(abbrev: str) -> Job | None:
    for job, code in JOB_ABBREVIATIONS.items():
        if code.lower() == str(abbrev or "").strip().lower():
            return job
    return None


def str_to_species(raw: str | None) -> Species | None:
    token = _normalize_token(raw)
    if not token:
        return None
    for species in Species:
        if token in {_normalize_token(species.value), _normalize_token(species_name(species))}:
            return species
    return species_by_abbrev(token)


def str_to_job(raw: str | None) -> Job | None:
    token = _normalize_token(raw)
    if not token:
        return None
    for job in Job:
        if token in {_normalize_token(job.value), _normalize_token(job_name(job))}:
            return job
    return job_by_abbrev(token)


def str_to_weapon(raw: str | None) -> Weapon | None:
    token = _normalize_token(raw)
    if not token:
        return None
    for weapon in Weapon:
        if token == _normalize_token(weapon.value):
            return weapon
    return None


def parse_combo(combo: str | None) -> tuple[Species, Job, WeaponChoice] | None:
    """Parse ``HuFi.flail`` or ``Human Fighter.flail``; ``None`` when unreadable."""
    parts = str(combo or "").split(".")
    character = parts[0].strip()
    species: Species | None = None
    job: Job | None = None
    if len(character) == 4 and " " not in character:
        species = species_by_abbrev(character[:2])
        job = job_by_abbrev(character[2:])
    else:
        lowered = character.lower()
        # Longest name first so "Deep Elf" wins over shorter prefixes.
        for candidate in sorted(Species, key=lambda item: -len(species_name(item))):
            prefix = species_name(candidate).lower()
            if lowered.startswith(prefix):
                species = candidate
                job = str_to_job(character[len(prefix):])
                break
    if species is None or job is None:
        return None

    weapon: WeaponChoice = Wildcard.UNKNOWN
    if len(parts) > 1 and parts[1].strip():
        parsed = str_to_weapon(parts[1])
        if parsed is None:
            return None
        weapon = parsed
    return species, job, weapon


def species_has_claws(species: Species) -> bool:
    return species in CLAWED_SPECIES


def species_can_throw_large_rocks(species: Species) -> bool:
    return species in LARGE_ROCK_SPECIES


def job_restriction(species: Species, job: Job) -> RestrictionLevel:
    """How ``job`` looks from ``species``: the job menu view."""
    if (species, job) in BANNED_COMBINATIONS:
        return RestrictionLevel.BANNED
    if job in RECOMMENDED_JOBS.get(species, frozenset()):
        return RestrictionLevel.UNRESTRICTED
    return RestrictionLevel.RESTRICTED


def species_restriction(job: Job, species: Species) -> RestrictionLevel:
    """How ``species`` looks from ``job``: the species menu view."""
    if (species, job) in BANNED_COMBINATIONS:
        return RestrictionLevel.BANNED
    if species in RECOMMENDED_SPECIES.get(job, frozenset()):
        return RestrictionLevel.UNRESTRICTED
    return RestrictionLevel.RESTRICTED


def weapon_restriction(weapon: Weapon, species: Species, job: Job) -> RestrictionLevel:
    if species in NON_WEAPON_SPECIES and weapon != Weapon.UNARMED:
        return RestrictionLevel.BANNED
    if species in TINY_SPECIES and weapon in TINY_SPECIES_BANNED_WEAPONS:
        return RestrictionLevel.BANNED
    if species in SMALL_SPECIES and weapon in SMALL_SPECIES_BANNED_WEAPONS:
        return RestrictionLevel.BANNED
    if job == Job.FIGHTER and weapon in SHIELD_BANNED_WEAPONS:
        return RestrictionLevel.BANNED
    if weapon == Weapon.UNARMED and species_has_claws(species):
        return RestrictionLevel.UNRESTRICTED
    if WEAPON_SKILLS.get(weapon) in SPECIES_WEAPON_SKILLS.get(species, frozenset()):
        return RestrictionLevel.UNRESTRICTED
    return RestrictionLevel.RESTRICTED
