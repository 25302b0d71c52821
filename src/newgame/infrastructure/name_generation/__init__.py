from newgame.infrastructure.name_generation.syllable_name_generator import SyllableNameGenerator

__all__ = ["SyllableNameGenerator"]
