from .direction_selector import COSINE_EPSILON, candidates_in_direction, find_closest_in_direction, select_in_direction
from .frame import Direction, Frame, Vector2D

__all__ = [
    "COSINE_EPSILON",
    "Direction",
    "Frame",
    "Vector2D",
    "candidates_in_direction",
    "find_closest_in_direction",
    "select_in_direction",
]
