from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from newgame.domain.models.character_options import GameType, Wildcard
from newgame.domain.models.newgame import CharacterRequest
from newgame.domain.services.compatibility_catalog import str_to_job, str_to_species, str_to_weapon


def _choice_to_text(value) -> str:
    if value is None or value == Wildcard.UNKNOWN:
        return ""
    return str(value.value)


def _text_to_choice(raw: Any, parse: Callable[[str], Any]):
    text = str(raw or "").strip().lower()
    if not text:
        return Wildcard.UNKNOWN
    if text == Wildcard.RANDOM.value:
        return Wildcard.RANDOM
    if text in {Wildcard.VIABLE.value, "recommended"}:
        return Wildcard.VIABLE
    parsed = parse(text)
    return parsed if parsed is not None else Wildcard.UNKNOWN


def _text_list(raw: Any) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [segment.strip() for segment in raw.split(",") if segment.strip()]
    return [str(item).strip() for item in raw if str(item).strip()]


def _parsed_list(raw: Any, parse: Callable[[str], Any]) -> list:
    rows = []
    for item in _text_list(raw):
        parsed = parse(item)
        if parsed is not None and parsed not in rows:
            rows.append(parsed)
    return rows


def request_to_payload(request: CharacterRequest) -> Dict[str, Any]:
    return {
        "name": request.name,
        "type": request.game_type.value,
        "species": _choice_to_text(request.species),
        "job": _choice_to_text(request.job),
        "weapon": _choice_to_text(request.weapon),
        "map": request.map_name,
        "fully_random": bool(request.fully_random),
        "allowed_species": [item.value for item in request.allowed_species],
        "allowed_jobs": [item.value for item in request.allowed_jobs],
        "allowed_weapons": [item.value for item in request.allowed_weapons],
        "allowed_combos": list(request.allowed_combos),
    }


def request_from_payload(payload: Optional[Mapping[str, Any]]) -> CharacterRequest:
    """Build a request from stored or command-line values; unreadable fields become UNKNOWN."""
    data = dict(payload or {})
    return CharacterRequest(
        name=str(data.get("name") or "").strip(),
        game_type=GameType.normalize(data.get("type")),
        species=_text_to_choice(data.get("species"), str_to_species),
        job=_text_to_choice(data.get("job"), str_to_job),
        weapon=_text_to_choice(data.get("weapon"), str_to_weapon),
        map_name=str(data.get("map") or "").strip(),
        fully_random=bool(data.get("fully_random", False)),
        allowed_species=_parsed_list(data.get("allowed_species"), str_to_species),
        allowed_jobs=_parsed_list(data.get("allowed_jobs"), str_to_job),
        allowed_weapons=_parsed_list(data.get("allowed_weapons"), str_to_weapon),
        allowed_combos=_text_list(data.get("allowed_combos")),
    )
