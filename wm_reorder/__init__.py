from .move_list import Move, apply_moves, generate_move_list
from .space_order import LabeledSpace, ReorderPlan, ReorderPlanError, plan_space_reorder

__all__ = [
    "LabeledSpace",
    "Move",
    "ReorderPlan",
    "ReorderPlanError",
    "apply_moves",
    "generate_move_list",
    "plan_space_reorder",
]
