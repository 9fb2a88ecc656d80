"""Pick the frame lying most directly in a compass direction from a reference frame."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from wm_position.frame import Direction, Frame, Vector2D

_LOGGER_NAME = "WMStableLayout.Position"
_LOGGER = logging.getLogger(_LOGGER_NAME)

T = TypeVar("T")

# Candidates whose |cosine| to the requested direction falls below this value are
# treated as perpendicular and skipped. Fixed value so results do not depend on
# the platform float epsilon.
COSINE_EPSILON = 1e-6


def _default_frame_of(candidate: object) -> Frame:
    if isinstance(candidate, Frame):
        return candidate
    frame = getattr(candidate, "frame", None)
    if not isinstance(frame, Frame):
        raise TypeError(f"cannot resolve a frame for candidate {candidate!r}")
    return frame


def candidates_in_direction(
    reference: Frame,
    candidates: Iterable[T],
    direction: Direction,
    *,
    frame_of: Optional[Callable[[T], Frame]] = None,
) -> List[T]:
    """Return the candidates that lie past ``reference`` and overlap it on the orthogonal axis."""

    resolve = frame_of or _default_frame_of
    return [candidate for candidate in candidates if resolve(candidate).is_in_direction(reference, direction)]


def find_closest_in_direction(
    center: Vector2D,
    candidates: Iterable[T],
    to_point: Callable[[T], Vector2D],
    direction: Vector2D,
    *,
    epsilon: float = COSINE_EPSILON,
) -> Optional[T]:
    direction_length = direction.length()
    if direction_length == 0.0:
        return None
    scored: List[Tuple[float, T]] = []
    for candidate in candidates:
        displacement = to_point(candidate) - center
        distance = displacement.length()
        if distance == 0.0:
            continue
        cosine = direction.dot(displacement) / (direction_length * distance)
        if abs(cosine) < epsilon:
            continue
        scored.append((distance / cosine, candidate))
    if not scored:
        return None
    scored.sort(key=lambda entry: entry[0])
    return scored[0][1]


def select_in_direction(
    reference: Frame,
    candidates: Sequence[T],
    direction: Direction,
    *,
    frame_of: Optional[Callable[[T], Frame]] = None,
    epsilon: float = COSINE_EPSILON,
) -> Optional[T]:
    """Return the candidate lying most directly in ``direction`` from ``reference``.

    Candidates are filtered with :meth:`Frame.is_in_direction`, then scored by
    ``distance / cosine`` between the frame centers so that alignment weighs more
    than raw distance. Ties keep candidate order. ``None`` means nothing qualifies.
    """

    resolve = frame_of or _default_frame_of
    _LOGGER.debug("Looking for candidates in direction %s from %s", direction.value, reference)
    eligible = candidates_in_direction(reference, candidates, direction, frame_of=resolve)
    _LOGGER.debug("Found %d of %d candidates in direction %s", len(eligible), len(candidates), direction.value)
    chosen = find_closest_in_direction(
        reference.center,
        eligible,
        lambda candidate: resolve(candidate).center,
        direction.unit_vector,
        epsilon=epsilon,
    )
    if chosen is None:
        _LOGGER.debug("No candidate in direction %s", direction.value)
    return chosen
