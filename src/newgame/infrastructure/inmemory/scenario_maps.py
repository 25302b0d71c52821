from typing import Iterable, List, Optional

from newgame.domain.models.character_options import ScenarioMap
from newgame.domain.repositories import ScenarioMapRepository


DEFAULT_SCENARIO_MAPS = (
    ScenarioMap(name="sprint_i", description="Sprint I: \"Red Sonja\"", order=1, tags=("sprint",)),
    ScenarioMap(name="sprint_ii", description="Sprint II: \"The Violet Keep of Menkaure\"", order=2, tags=("sprint",)),
    ScenarioMap(name="sprint_iii", description="Sprint III: \"The Ten Rune Challenge\"", order=3, tags=("sprint",)),
    ScenarioMap(name="sprint_iv", description="Sprint IV: \"Fedhas' Mad Dash\"", order=4, tags=("sprint",)),
    ScenarioMap(name="sprint_v", description="Sprint V: \"Ziggurat Sprint\"", order=5, tags=("sprint",)),
    ScenarioMap(name="tutorial_lesson1", description="Lesson 1: Movement and Exploration", order=1, tags=("tutorial",)),
    ScenarioMap(name="tutorial_lesson2", description="Lesson 2: Monsters and Combat", order=2, tags=("tutorial",)),
    ScenarioMap(name="tutorial_lesson3", description="Lesson 3: Items and Inventory", order=3, tags=("tutorial",)),
    ScenarioMap(name="tutorial_lesson4", description="Lesson 4: Magic and Spellcasting", order=4, tags=("tutorial",)),
    ScenarioMap(name="tutorial_lesson5", description="Lesson 5: Gods and Divine Abilities", order=5, tags=("tutorial",)),
)


class InMemoryScenarioMapRepository(ScenarioMapRepository):
    def __init__(self, maps: Optional[Iterable[ScenarioMap]] = None):
        self._maps = list(maps) if maps is not None else list(DEFAULT_SCENARIO_MAPS)

    def find_maps_for_tag(self, tag: str) -> List[ScenarioMap]:
        key = str(tag or "").strip().lower()
        return [row for row in self._maps if key in {str(item).lower() for item in row.tags}]
