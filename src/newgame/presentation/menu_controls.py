import os
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from rich.console import Console
from rich.panel import Panel

try:  # Windows-specific keyboard handling
    import msvcrt  # type: ignore
except ImportError:  # pragma: no cover - non-Windows terminals read whole lines
    msvcrt = None


_CONSOLE = Console()
_PANEL_BORDER = "yellow"
NAMED_KEYS = {"UP", "DOWN", "ENTER", "ESC", "TAB", "SPACE", "BACKSPACE"}


@dataclass(frozen=True)
class MenuEntry:
    hotkey: str
    label: str
    value: Any = None
    style: str = "white"


def default_console() -> Console:
    return _CONSOLE


def clear_screen() -> None:
    """Clear the console in a basic cross-platform way."""

    os.system("cls" if os.name == "nt" else "clear")


def _read_key_windows():
    ch = msvcrt.getch()

    if ch in (b"\x00", b"\xe0"):
        ch2 = msvcrt.getch()
        if ch2 == b"H":
            return "UP"
        if ch2 == b"P":
            return "DOWN"
        return None

    if ch in (b"\r", b"\n"):
        return "ENTER"
    if ch == b"\x1b":
        return "ESC"
    if ch == b"\t":
        return "TAB"
    if ch == b"\x08":
        return "BACKSPACE"
    if ch == b" ":
        return "SPACE"

    try:
        return ch.decode("utf-8")
    except UnicodeDecodeError:
        return None


def read_key():
    """Read a key, falling back to one line of stdin when msvcrt is unavailable."""

    if msvcrt is not None:
        return _read_key_windows()

    line = sys.stdin.readline()
    if line == "":
        return "ESC"
    return line.rstrip("\r\n")


def normalize_menu_key(key):
    """Map raw keys and typed words to menu keys; single characters keep their case."""
    if key is None:
        return None
    if key in NAMED_KEYS:
        return key
    if key == " ":
        return "SPACE"
    if key == "\t":
        return "TAB"

    lowered = str(key).strip().lower()
    mapping = {
        "": "ENTER",
        "enter": "ENTER",
        "esc": "ESC",
        "escape": "ESC",
        "tab": "TAB",
        "space": "SPACE",
        "bksp": "BACKSPACE",
        "backspace": "BACKSPACE",
        "up": "UP",
        "down": "DOWN",
    }
    if lowered in mapping:
        return mapping[lowered]
    return str(key).strip()


def _hotkey_label(hotkey: str) -> str:
    return {"TAB": "Tab", "SPACE": "Space", "BACKSPACE": "Bksp"}.get(hotkey, hotkey)


def render_panel(console: Console, title: str, lines: Sequence[str], subtitle: str = "") -> None:
    console.print(
        Panel.fit(
            "\n".join(lines),
            title=f"[bold yellow]{title or 'Menu'}[/bold yellow]",
            subtitle=f"[dim]{subtitle}[/dim]" if subtitle else None,
            subtitle_align="left",
            border_style=_PANEL_BORDER,
            padding=(0, 1),
        )
    )


def hotkey_menu(
    title: str,
    entries: Sequence[MenuEntry],
    extras: Sequence[MenuEntry] = (),
    header: Sequence[str] = (),
    initial: int = 0,
    *,
    console: Optional[Console] = None,
    key_reader: Optional[Callable[[], Any]] = None,
    clear: bool = True,
) -> Optional[MenuEntry]:
    """Show ``entries`` plus ``extras`` and return the activated entry.

    Letters and named keys activate entries directly; UP/DOWN move the
    highlight over ``entries`` and ENTER activates it. ESC returns ``None``.
    """
    if not entries and not extras:
        raise ValueError("hotkey_menu requires at least one entry")

    out = console or _CONSOLE
    selected = min(max(int(initial), 0), max(len(entries) - 1, 0))
    lookup = {entry.hotkey: entry for entry in list(entries) + list(extras)}

    while True:
        if clear:
            clear_screen()
        lines = list(header)
        if lines:
            lines.append("")
        for index, entry in enumerate(entries):
            text = f"{entry.hotkey} - {entry.label}"
            if index == selected:
                lines.append(f"[bold black on yellow] > {text} [/bold black on yellow]")
            else:
                lines.append(f"[{entry.style}]   {text}[/{entry.style}]")
        if extras:
            lines.append("")
            for entry in extras:
                lines.append(f"[cyan]{_hotkey_label(entry.hotkey)} - {entry.label}[/cyan]")
        render_panel(out, title, lines, subtitle="Letter or Enter to choose, Esc to cancel")

        key = normalize_menu_key((key_reader or read_key)())
        if key == "UP" and entries:
            selected = (selected - 1) % len(entries)
            continue
        if key == "DOWN" and entries:
            selected = (selected + 1) % len(entries)
            continue
        if key == "ENTER" and entries:
            return entries[selected]
        if key == "ESC":
            return None
        if key in lookup:
            return lookup[key]
