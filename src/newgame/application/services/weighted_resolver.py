from __future__ import annotations

import random
from typing import Callable, Iterable, Optional, Tuple, TypeVar


T = TypeVar("T")


def pick_uniform(
    candidates: Iterable[T],
    predicate: Optional[Callable[[T], bool]] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[int, Optional[T]]:
    """Select one candidate uniformly among those satisfying ``predicate``.

    Single pass over ``candidates`` (reservoir sampling of size one), so the
    stream never needs to be materialized. Returns ``(count, selected)``;
    ``count == 0`` means no candidate matched and ``selected`` is ``None``.
    """
    source = rng or random.Random()
    count = 0
    selected: Optional[T] = None
    for candidate in candidates:
        if predicate is not None and not predicate(candidate):
            continue
        count += 1
        if source.randrange(count) == 0:
            selected = candidate
    return count, selected
