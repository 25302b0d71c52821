from __future__ import annotations

import random

from newgame.domain.services.names import MAX_NAME_LENGTH


class SyllableNameGenerator:
    """Pronounceable random names built from alternating consonant and vowel clusters."""

    _ONSETS = (
        "b", "br", "c", "ch", "d", "dr", "f", "g", "gr", "h", "k", "kr", "l", "m",
        "n", "p", "qu", "r", "s", "sh", "st", "t", "th", "tr", "v", "w", "z",
    )
    _VOWELS = ("a", "e", "i", "o", "u", "ae", "ai", "ea", "ia", "io", "ou", "y")
    _CODAS = ("", "", "", "n", "r", "s", "th", "l", "k", "x", "nd", "rn")

    def __init__(self, min_syllables: int = 2, max_syllables: int = 3) -> None:
        self.min_syllables = max(1, int(min_syllables))
        self.max_syllables = max(self.min_syllables, int(max_syllables))

    def make_name(self, rng: random.Random | None = None) -> str:
        source = rng or random.Random()
        syllables = source.randint(self.min_syllables, self.max_syllables)
        parts = []
        for index in range(syllables):
            onset = "" if index == 0 and source.random() < 0.25 else source.choice(self._ONSETS)
            parts.append(onset + source.choice(self._VOWELS))
        parts.append(source.choice(self._CODAS))
        return "".join(parts)[:MAX_NAME_LENGTH].capitalize()
