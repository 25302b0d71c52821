from collections import defaultdict
import logging
from typing import Callable, DefaultDict, List, Type

from newgame.domain.events import CharacterRolled, NewGameChosen, WeaponChoiceAborted


NewGameEvent = CharacterRolled | WeaponChoiceAborted | NewGameChosen
Handler = Callable[[object], None]

logger = logging.getLogger(__name__)


class EventBus:
    """Synchronous in-process bus for new-game events.

    Handlers run in ``(priority, subscription order)`` order. A failing handler
    is logged and isolated so the remaining handlers still see the event.
    """

    def __init__(self) -> None:
        self._subscribers: DefaultDict[Type[object], List[tuple[int, int, Handler]]] = defaultdict(list)
        self._next_order = 0
        self._last_publish_errors: List[Exception] = []

    def subscribe(self, event_type: Type[object], handler: Handler, *, priority: int = 100) -> None:
        rows = self._subscribers[event_type]
        rows.append((int(priority), self._next_order, handler))
        self._next_order += 1
        rows.sort(key=lambda row: (row[0], row[1]))

    def handler_count(self, event_type: Type[object]) -> int:
        return len(self._subscribers.get(event_type, []))

    def publish(self, event: NewGameEvent) -> None:
        self._last_publish_errors = []
        event_type = type(event)
        rows = list(self._subscribers.get(event_type, []))
        logger.debug("Publishing %s to %d handler(s)", event_type.__name__, len(rows))
        for priority, _, handler in rows:
            try:
                handler(event)
            except Exception as exc:
                self._last_publish_errors.append(exc)
                logger.exception(
                    "Event handler failed and was isolated",
                    extra={
                        "event_type": event_type.__name__,
                        "handler": getattr(handler, "__qualname__", repr(handler)),
                        "priority": priority,
                    },
                )

    def last_publish_errors(self) -> List[Exception]:
        return list(self._last_publish_errors)
