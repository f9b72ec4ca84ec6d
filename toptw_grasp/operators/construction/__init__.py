"""GRASP construction phase: candidate evaluation and the insertion loop."""

from .evaluation import comprehensive_evaluation, sort_candidates
from .greedy_randomized import commit_insertion, greedy_randomized_construction

__all__ = [
    "commit_insertion",
    "comprehensive_evaluation",
    "greedy_randomized_construction",
    "sort_candidates",
]
