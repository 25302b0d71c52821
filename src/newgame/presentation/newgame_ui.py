from __future__ import annotations

import string
from typing import Any, Callable, List, Optional, Sequence

from rich.console import Console

from newgame.application.dtos import (
    CharacterSummaryView,
    ItemStatus,
    JobOptionView,
    MapOptionView,
    SpeciesOptionView,
    WeaponOptionView,
)
from newgame.application.mappers.newgame_mapper import char_description, default_choice_label, welcome_text
from newgame.application.services.prompter import ConfirmResult, MenuAction, MenuSelection, NewGamePrompter
from newgame.domain.models.character_options import CharacterPreset, RestrictionLevel, WeaponChoice, Wildcard
from newgame.domain.models.newgame import CharacterRequest, ResolvedCharacter
from newgame.presentation.menu_controls import (
    MenuEntry,
    clear_screen,
    default_console,
    hotkey_menu,
    normalize_menu_key,
    read_key,
    render_panel,
)


_LETTERS = string.ascii_lowercase + string.ascii_uppercase.replace("X", "")
_STATUS_STYLES = {
    ItemStatus.ALLOWED: "bold green",
    ItemStatus.RESTRICTED: "dim",
    ItemStatus.UNKNOWN: "white",
}
_CANCEL_WORDS = {"esc", "cancel", "quit"}


def _letters(count: int) -> List[str]:
    if count > len(_LETTERS):
        raise ValueError(f"Too many menu entries ({count}) for single-key hotkeys")
    return list(_LETTERS[:count])


def _selection(entry: Optional[MenuEntry], on_escape: MenuAction) -> MenuSelection:
    if entry is None:
        return MenuSelection(on_escape)
    if isinstance(entry.value, MenuSelection):
        return entry.value
    return MenuSelection.choose(entry.value)


class RichNewGamePrompter(NewGamePrompter):
    """Keyboard-driven new-game menus rendered with rich panels."""

    def __init__(
        self,
        console: Optional[Console] = None,
        key_reader: Optional[Callable[[], Any]] = None,
        line_reader: Optional[Callable[[str], str]] = None,
        clear: bool = True,
    ):
        self.console = console or default_console()
        self.key_reader = key_reader or read_key
        self.line_reader = line_reader or (lambda prompt: self.console.input(prompt))
        self.clear = clear

    def _menu(self, title: str, entries: Sequence[MenuEntry], extras: Sequence[MenuEntry], header: Sequence[str], initial: int = 0):
        return hotkey_menu(
            title,
            entries,
            extras,
            header,
            initial,
            console=self.console,
            key_reader=self.key_reader,
            clear=self.clear,
        )

    def _character_extras(self, noun: str, other_noun: str, defaults: CharacterRequest) -> List[MenuEntry]:
        extras = [
            MenuEntry("+", f"Recommended {noun}", MenuSelection(MenuAction.VIABLE)),
            MenuEntry("*", f"Random {noun}", MenuSelection(MenuAction.RANDOM)),
            MenuEntry("#", "Recommended character", MenuSelection(MenuAction.VIABLE_CHARACTER)),
            MenuEntry("!", "Random character", MenuSelection(MenuAction.RANDOM_CHARACTER)),
            MenuEntry("SPACE", f"Pick {other_noun} first", MenuSelection(MenuAction.PICK_OTHER_FIRST)),
            MenuEntry("BACKSPACE", f"Clear {noun}", MenuSelection(MenuAction.CLEAR)),
            MenuEntry("X", "Quit", MenuSelection(MenuAction.QUIT)),
        ]
        if defaults.char_defined():
            extras.insert(4, MenuEntry("TAB", char_description(defaults), MenuSelection(MenuAction.DEFAULT_CHOICE)))
        return extras

    def prompt_species(
        self,
        options: List[SpeciesOptionView],
        request: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
    ) -> MenuSelection:
        letters = _letters(len(options))
        entries = [
            MenuEntry(letter, f"{row.name} ({row.group})", row.species, _STATUS_STYLES[row.status])
            for letter, row in zip(letters, options)
        ]
        initial = next((index for index, row in enumerate(options) if row.is_default), 0)
        header = [f"[#d6c59d]{welcome_text(resolved)}[/#d6c59d]", "[cyan]Please select your species.[/cyan]"]
        entry = self._menu("Species", entries, self._character_extras("species", "background", defaults), header, initial)
        return _selection(entry, MenuAction.CANCEL)

    def prompt_job(
        self,
        options: List[JobOptionView],
        request: CharacterRequest,
        resolved: ResolvedCharacter,
        defaults: CharacterRequest,
    ) -> MenuSelection:
        letters = _letters(len(options))
        entries = [
            MenuEntry(letter, f"{row.name} ({row.group})", row.job, _STATUS_STYLES[row.status])
            for letter, row in zip(letters, options)
        ]
        initial = next((index for index, row in enumerate(options) if row.is_default), 0)
        header = [f"[#d6c59d]{welcome_text(resolved)}[/#d6c59d]", "[cyan]Please select your background.[/cyan]"]
        entry = self._menu("Background", entries, self._character_extras("background", "species", defaults), header, initial)
        return _selection(entry, MenuAction.CANCEL)

    def prompt_weapon(
        self,
        options: List[WeaponOptionView],
        default_weapon: WeaponChoice,
        resolved: ResolvedCharacter,
    ) -> MenuSelection:
        letters = _letters(len(options))
        entries = [
            MenuEntry(
                letter,
                row.label,
                row.weapon,
                "bold green" if row.restriction == RestrictionLevel.UNRESTRICTED else "dim",
            )
            for letter, row in zip(letters, options)
        ]
        extras = [
            MenuEntry("+", "Recommended random choice", MenuSelection(MenuAction.VIABLE)),
            MenuEntry("*", "Random weapon", MenuSelection(MenuAction.RANDOM)),
            MenuEntry("BACKSPACE", "Return to character menu", MenuSelection(MenuAction.BACK)),
            MenuEntry("SPACE", "Return to character menu", MenuSelection(MenuAction.BACK)),
            MenuEntry("X", "Quit", MenuSelection(MenuAction.QUIT)),
        ]
        if default_weapon != Wildcard.UNKNOWN:
            label = default_choice_label(default_weapon, resolved.species)
            extras.insert(2, MenuEntry("TAB", label, MenuSelection(MenuAction.DEFAULT_CHOICE)))
        initial = next((index for index, row in enumerate(options) if row.is_default), 0)
        header = [f"[#d6c59d]{welcome_text(resolved)}[/#d6c59d]", "[cyan]You have a choice of weapons:[/cyan]"]
        entry = self._menu("Starting Weapon", entries, extras, header, initial)
        # Escape steps back to the character menus rather than abandoning the game.
        return _selection(entry, MenuAction.BACK)

    def prompt_map(
        self,
        options: List[MapOptionView],
        resolved: ResolvedCharacter,
        game_type_label: str,
        previous_map: str = "",
    ) -> MenuSelection:
        letters = _letters(len(options))
        entries = [MenuEntry(letter, row.description, row.name) for letter, row in zip(letters, options)]
        extras = [
            MenuEntry("*", f"Random {game_type_label[:-1] if game_type_label.endswith('s') else game_type_label}",
                      MenuSelection(MenuAction.RANDOM)),
            MenuEntry("SPACE", "Decide later", MenuSelection(MenuAction.BACK)),
            MenuEntry("X", "Quit", MenuSelection(MenuAction.QUIT)),
        ]
        if previous_map:
            extras.insert(1, MenuEntry("TAB", previous_map, MenuSelection(MenuAction.DEFAULT_CHOICE)))
        initial = next((index for index, row in enumerate(options) if row.is_default), 0)
        header = [f"[#d6c59d]{welcome_text(resolved)}[/#d6c59d]", f"[cyan]You have a choice of {game_type_label}:[/cyan]"]
        entry = self._menu(game_type_label.title(), entries, extras, header, initial)
        return _selection(entry, MenuAction.CANCEL)

    def confirm_character(self, summary: CharacterSummaryView) -> ConfirmResult:
        if self.clear:
            clear_screen()
        render_panel(
            self.console,
            "Random Character",
            [summary.prompt_line, "", "Do you want to play this combination? (ynq) \\[y]"],
        )
        key = normalize_menu_key(self.key_reader())
        if key == "ESC" or key in {"q", "Q"}:
            return ConfirmResult.QUIT
        if key in {"n", "N", "TAB", "!", "#"}:
            return ConfirmResult.REJECT
        return ConfirmResult.ACCEPT

    def prompt_hints_character(self, presets: Sequence[CharacterPreset]) -> Optional[CharacterPreset]:
        letters = _letters(len(presets))
        entries = [MenuEntry(letter, preset.label, preset) for letter, preset in zip(letters, presets)]
        header = ["[cyan]Pick a character to learn the game with:[/cyan]"]
        entry = self._menu("Hints Mode", entries, (), header)
        return entry.value if entry is not None else None

    def prompt_name(self, summary: CharacterSummaryView, last_error: str = "") -> Optional[str]:
        if self.clear:
            clear_screen()
        lines = [
            summary.prompt_line,
            "",
            "[cyan]What is your name today?[/cyan]",
            "Leave blank for a random name, or type [bold]esc[/bold] to cancel this character.",
        ]
        if last_error:
            lines.extend(["", f"[bold red]{last_error}[/bold red]"])
        render_panel(self.console, "Character Name", lines)
        raw = self.line_reader("[bold yellow]>>> [/bold yellow]")
        if str(raw or "").strip().lower() in _CANCEL_WORDS:
            return None
        return str(raw or "")

    def confirm_overwrite(self, name: str) -> bool:
        render_panel(
            self.console,
            "Character Name",
            [f"A save for {name} already exists.", "[bold red]Really overwrite? \\[Y/n][/bold red]"],
        )
        answer = self.line_reader("[bold yellow]>>> [/bold yellow]")
        return str(answer or "").strip() == "Y"
