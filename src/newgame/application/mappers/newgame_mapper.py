from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from newgame.application.dtos import (
    CharacterSummaryView,
    ItemStatus,
    JobOptionView,
    MapOptionView,
    SpeciesOptionView,
    WeaponOptionView,
)
from newgame.domain.models.character_options import (
    RestrictionLevel,
    ScenarioMap,
    Species,
    Weapon,
    WeaponChoice,
    Wildcard,
)
from newgame.domain.models.newgame import CharacterRequest, ResolvedCharacter
from newgame.domain.repositories import CompatibilityOracle
from newgame.domain.services import compatibility_catalog as catalog


WeaponCandidate = Tuple[Weapon, RestrictionLevel]

_AMMO_NAMES = {
    Weapon.HUNTING_SLING: "sling bullets",
    Weapon.SHORTBOW: "arrows",
    Weapon.HAND_CROSSBOW: "bolts",
}


def _is_random(value) -> bool:
    return value in (Wildcard.RANDOM, Wildcard.VIABLE)


def _status(restriction: RestrictionLevel) -> ItemStatus:
    if restriction == RestrictionLevel.UNRESTRICTED:
        return ItemStatus.ALLOWED
    return ItemStatus.RESTRICTED


def to_species_option_views(
    oracle: CompatibilityOracle,
    resolved: ResolvedCharacter,
    defaults: CharacterRequest,
) -> List[SpeciesOptionView]:
    """Species menu rows, grouped for layout. BANNED species are not offered."""
    starting = set(oracle.starting_species())
    rows: List[SpeciesOptionView] = []
    for group, members in catalog.SPECIES_GROUPS:
        for species in members:
            if species not in starting:
                continue
            if resolved.job is None:
                status = ItemStatus.UNKNOWN
            else:
                restriction = oracle.species_restriction(resolved.job, species)
                if restriction == RestrictionLevel.BANNED:
                    continue
                status = _status(restriction)
            rows.append(
                SpeciesOptionView(
                    species=species,
                    name=catalog.species_name(species),
                    abbrev=catalog.SPECIES_ABBREVIATIONS[species],
                    group=group,
                    status=status,
                    is_default=defaults.species == species,
                )
            )
    return rows


def to_job_option_views(
    oracle: CompatibilityOracle,
    resolved: ResolvedCharacter,
    defaults: CharacterRequest,
) -> List[JobOptionView]:
    starting = set(oracle.starting_jobs())
    rows: List[JobOptionView] = []
    for group, members in catalog.JOB_GROUPS:
        for job in members:
            if job not in starting:
                continue
            if resolved.species is None:
                status = ItemStatus.UNKNOWN
            else:
                restriction = oracle.restriction(resolved.species, job)
                if restriction == RestrictionLevel.BANNED:
                    continue
                status = _status(restriction)
            rows.append(
                JobOptionView(
                    job=job,
                    name=catalog.job_name(job),
                    abbrev=catalog.JOB_ABBREVIATIONS[job],
                    group=group,
                    status=status,
                    is_default=defaults.job == job,
                )
            )
    return rows


def thrown_weapon_label(species: Species) -> str:
    if catalog.species_can_throw_large_rocks(species):
        return "large rocks"
    if species in catalog.SMALL_SPECIES:
        return "tomahawks"
    return "javelins"


def weapon_label(weapon: Weapon, species: Species) -> str:
    if weapon == Weapon.UNARMED:
        return "claws" if catalog.species_has_claws(species) else "unarmed"
    if weapon == Weapon.THROWN:
        return f"{thrown_weapon_label(species)} and throwing nets"
    label = catalog.weapon_name(weapon)
    ammo = _AMMO_NAMES.get(weapon)
    if ammo:
        label = f"{label} and {ammo}"
    return label


def fixup_weapon(weapon: WeaponChoice, candidates: Sequence[WeaponCandidate]) -> WeaponChoice:
    """Keep wildcards; a concrete weapon outside ``candidates`` becomes UNKNOWN."""
    if isinstance(weapon, Wildcard):
        return weapon
    if any(weapon == candidate for candidate, _ in candidates):
        return weapon
    return Wildcard.UNKNOWN


def to_weapon_option_views(
    species: Species,
    candidates: Sequence[WeaponCandidate],
    default_weapon: WeaponChoice,
) -> List[WeaponOptionView]:
    rows: List[WeaponOptionView] = []
    for index, (weapon, restriction) in enumerate(candidates):
        is_default = weapon == default_weapon or (default_weapon == Wildcard.UNKNOWN and index == 0)
        rows.append(
            WeaponOptionView(
                weapon=weapon,
                label=weapon_label(weapon, species),
                restriction=restriction,
                is_default=is_default,
            )
        )
    return rows


def to_map_option_views(maps: Iterable[ScenarioMap], default_map: str = "") -> List[MapOptionView]:
    rows = [
        MapOptionView(name=row.name, description=row.desc_or_name(), is_default=row.name == default_map)
        for row in maps
    ]
    if rows and not any(row.is_default for row in rows):
        rows[0].is_default = True
    return rows


def char_description(request: CharacterRequest) -> str:
    species, job = request.species, request.job
    if _is_random(species) and _is_random(job):
        if Wildcard.VIABLE in (species, job):
            return "Recommended character"
        return "Random character"
    if _is_random(job) and isinstance(species, Species):
        prefix = "Random " if job == Wildcard.RANDOM else "Recommended "
        return prefix + catalog.species_name(species)
    if _is_random(species) and not isinstance(job, Wildcard):
        prefix = "Random " if species == Wildcard.RANDOM else "Recommended "
        return prefix + catalog.job_name(job)
    if isinstance(species, Species) and not isinstance(job, Wildcard):
        return f"{catalog.species_name(species)} {catalog.job_name(job)}"
    return "Unfinished character"


def welcome_text(resolved: ResolvedCharacter) -> str:
    parts = []
    if resolved.species is not None:
        parts.append(catalog.species_name(resolved.species))
    if resolved.job is not None:
        parts.append(catalog.job_name(resolved.job))
    text = " ".join(parts)
    if resolved.name:
        text = f"{resolved.name} the {text}" if text else resolved.name
    elif text:
        text = f"unnamed {text}"
    return f"Welcome, {text}." if text else "Welcome."


def character_prompt_line(resolved: ResolvedCharacter) -> str:
    species = catalog.species_name(resolved.species) if resolved.species is not None else "adventurer"
    job = f" {catalog.job_name(resolved.job)}" if resolved.job is not None else ""
    article = "an" if species[:1].lower() in "aeiou" else "a"
    return f"You are {article} {species}{job}."


def to_character_summary_view(resolved: ResolvedCharacter) -> CharacterSummaryView:
    weapon_text = ""
    if resolved.weapon is not None and resolved.species is not None:
        weapon_text = weapon_label(resolved.weapon, resolved.species)
    return CharacterSummaryView(
        name=resolved.name,
        species_name=catalog.species_name(resolved.species) if resolved.species is not None else "",
        job_name=catalog.job_name(resolved.job) if resolved.job is not None else "",
        weapon_label=weapon_text,
        map_name=resolved.map_name,
        game_type=resolved.game_type.value,
        welcome=welcome_text(resolved),
        prompt_line=character_prompt_line(resolved),
    )


def default_choice_label(default_weapon: WeaponChoice, species: Optional[Species]) -> str:
    if default_weapon == Wildcard.RANDOM:
        return "Random"
    if default_weapon == Wildcard.VIABLE:
        return "Recommended"
    if isinstance(default_weapon, Weapon):
        if default_weapon == Weapon.THROWN and species is not None:
            return thrown_weapon_label(species)
        return catalog.weapon_name(default_weapon)
    return ""
