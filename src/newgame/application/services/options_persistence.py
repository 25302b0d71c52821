import logging

from newgame.application.services.event_bus import EventBus
from newgame.domain.events import NewGameChosen
from newgame.domain.repositories import NewGameOptionsRepository


logger = logging.getLogger(__name__)


class NewGameOptionsRecorder:
    """Stores the accepted request so the next session offers it as the default."""

    def __init__(self, options_repo: NewGameOptionsRepository, event_bus: EventBus):
        self.options_repo = options_repo
        self.event_bus = event_bus

    def register_handlers(self) -> None:
        self.event_bus.subscribe(NewGameChosen, self.on_new_game_chosen, priority=50)

    def on_new_game_chosen(self, event: NewGameChosen) -> None:
        self.options_repo.save(event.choice)
        logger.debug("Saved new game defaults for %r", event.choice.name)


def register_newgame_options_handlers(
    event_bus: EventBus,
    options_repo: NewGameOptionsRepository | None,
) -> None:
    if options_repo is None:
        return

    recorder = NewGameOptionsRecorder(options_repo=options_repo, event_bus=event_bus)
    recorder.register_handlers()
