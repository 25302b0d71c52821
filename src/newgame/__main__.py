from pathlib import Path
import argparse
import logging
import os
import sys

from dotenv import load_dotenv

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from newgame.application.mappers.newgame_mapper import to_character_summary_view
from newgame.application.mappers.newgame_options_mapper import request_from_payload
from newgame.bootstrap import build_options_repo, create_newgame_service
from newgame.domain.errors import ConfigurationError, NewGameAborted
from newgame.domain.models.character_options import Wildcard
from newgame.domain.models.newgame import CharacterRequest
from newgame.presentation.newgame_ui import RichNewGamePrompter


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Menus: press the letter shown next to an entry, or UP/DOWN and ENTER.")
    print("- '*' picks at random, '+' picks a recommended option, ESC cancels.")
    print("- Startup issues: check NEWGAME_DATABASE_URL and NEWGAME_OPTIONS_PATH, or unset them.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="newgame", description="Choose a new character.")
    parser.add_argument("--name", default="", help="character name; prompted for when omitted")
    parser.add_argument("--type", dest="game_type", default="normal", help="normal, tutorial, hints or sprint")
    parser.add_argument("--species", default="", help="species name or abbreviation, 'random' or 'viable'")
    parser.add_argument("--job", default="", help="background name or abbreviation, 'random' or 'viable'")
    parser.add_argument("--weapon", default="", help="starting weapon, 'random' or 'viable'")
    parser.add_argument("--map", dest="map_name", default="", help="sprint or tutorial map; 'random' for any")
    parser.add_argument("--random", action="store_true", help="roll a fully random character")
    parser.add_argument("--viable", action="store_true", help="roll a fully random recommended character")
    parser.add_argument("--allowed-species", default="", help="comma separated species to draw from")
    parser.add_argument("--allowed-jobs", default="", help="comma separated backgrounds to draw from")
    parser.add_argument("--allowed-weapons", default="", help="comma separated weapons to draw from")
    parser.add_argument(
        "--combo",
        action="append",
        default=[],
        help="allowed character combo such as HuFi or 'Human Fighter.flail'; repeatable",
    )
    parser.add_argument("--seed", default=None, help="seed for a reproducible session")
    return parser


def request_from_args(args: argparse.Namespace) -> CharacterRequest:
    combos = []
    for raw in args.combo:
        combos.extend(segment.strip() for segment in str(raw).split(",") if segment.strip())

    request = request_from_payload(
        {
            "name": args.name,
            "type": args.game_type,
            "species": args.species,
            "job": args.job,
            "weapon": args.weapon,
            "map": args.map_name,
            "allowed_species": args.allowed_species,
            "allowed_jobs": args.allowed_jobs,
            "allowed_weapons": args.allowed_weapons,
            "allowed_combos": combos,
        }
    )
    if args.random or args.viable:
        wildcard = Wildcard.VIABLE if args.viable else Wildcard.RANDOM
        request.fully_random = True
        request.species = wildcard
        request.job = wildcard
    return request


def _configure_logging() -> None:
    level_name = os.getenv("NEWGAME_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    load_dotenv()
    _configure_logging()
    args = build_parser().parse_args(argv)

    try:
        options_repo = build_options_repo()
        defaults = options_repo.load() or CharacterRequest()
        service = create_newgame_service(RichNewGamePrompter(), options_repo=options_repo, seed=args.seed)
        resolved = service.choose_game(request_from_args(args), defaults)
    except NewGameAborted:
        print("Character creation canceled.")
        return 0
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}")
        return 1
    except KeyboardInterrupt:
        print("\nSession ended.")
        return 0
    except Exception as exc:
        print("An unexpected error occurred. Character creation closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()
        return 1

    summary = to_character_summary_view(resolved)
    print(f"{resolved.name}: {summary.prompt_line}")
    if summary.weapon_label:
        print(f"Starting weapon: {summary.weapon_label}")
    if resolved.map_name:
        print(f"Map: {resolved.map_name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
