"""
Solution Module - Result of strategy computation.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .pieces import Pieces
from .state import Configuration


@dataclass
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of configurations evaluated
        pruned_branches: Number of branches cut by the bound or the memo
        strategy_name: Name of strategy that computed this solution
        alternatives_tried: Starting configurations searched
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    strategy_name: str = ""
    alternatives_tried: int = 1


@dataclass
class Solution:
    """
    Result of a search.

    Attributes:
        final: Solved configuration (None when no solution within the bound)
        pieces: Starting configuration the solution was found from
        was_cancelled: True if stopped before the search finished
        metrics: Performance statistics
    """
    final: Optional[Configuration] = None
    pieces: Optional[Pieces] = None
    was_cancelled: bool = False
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def is_solved(self) -> bool:
        return self.final is not None

    @property
    def step(self) -> Optional[int]:
        """Number of moves, or None if not solved."""
        return self.final.step if self.final is not None else None

    @property
    def actions(self) -> List[str]:
        """Ordered move descriptors."""
        return list(self.final.actions) if self.final is not None else []

    @property
    def configurations(self) -> List[Configuration]:
        """Every configuration along the path, starting with the initial one."""
        return self.final.path() if self.final is not None else []

    def is_better_than(self, other: Optional["Solution"]) -> bool:
        """
        Compare two results; a solved result beats an unsolved one and
        fewer steps beat more. Ties keep the other result.
        """
        if not self.is_solved:
            return False
        if other is None or not other.is_solved:
            return True
        return self.step < other.step
