"""Restricted candidate list selection policies."""

from .policies import (
    SELECTION_POLICIES,
    alpha_cut_selection,
    best_value_selection,
    get_selection_policy,
    random_selection,
)

__all__ = [
    "SELECTION_POLICIES",
    "alpha_cut_selection",
    "best_value_selection",
    "get_selection_policy",
    "random_selection",
]
