"""
Base Strategy Module - Abstract base class for search strategies.
"""

import time
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .context import SolutionContext
from .solution import Solution, SolutionMetrics
from .state import Configuration


class SolverStrategy(ABC):
    """
    Abstract base class for all search strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        aliases: Other names accepted by the factory
        description: Human-readable description for the CLI
    """
    name: str = "base"
    aliases: Tuple[str, ...] = ()
    description: str = "Base strategy"

    @abstractmethod
    def solve(self, context: SolutionContext) -> Solution:
        """
        Search for the shortest solution of the context's configuration.

        Should periodically check context.is_cancelled() and return
        the best solution found so far if True.

        Args:
            context: Solution context with puzzle, memo and bound

        Returns:
            Solution with the solved configuration (or none) and metrics
        """
        pass

    def root(self, context: SolutionContext) -> Configuration:
        """Create the starting configuration and record it in the memo."""
        start = Configuration.initial(context.pieces)
        context.visited[start.hash] = 0
        return start

    def is_solved(self, context: SolutionContext, state: Configuration) -> bool:
        return context.generator.is_solved(state.pieces)

    def expand(self, context: SolutionContext, state: Configuration) -> List[Configuration]:
        """
        Generate the successors worth exploring.

        Every legal move of every shepherd is applied; a successor is
        kept only if its canonical hash is new or was previously reached
        at a strictly larger step. Kept successors are recorded in the
        memo before any of them is explored.

        Args:
            context: Solution context owning the memo
            state: Configuration to expand

        Returns:
            Child configurations in enumeration order
        """
        children = []
        step = state.step + 1
        for move, pieces in context.generator.successors(state.pieces):
            child = state.advance(pieces, move.describe(pieces))
            if context.allow(child.hash, step):
                children.append(child)
            else:
                context.pruned_branches += 1
        return children

    def _check_cancelled(self, context: SolutionContext) -> bool:
        """
        Convenience method to check cancellation.

        Args:
            context: Solution context

        Returns:
            True if strategy should stop
        """
        return context.is_cancelled()

    def _build_solution(
        self,
        context: SolutionContext,
        final: Optional[Configuration],
        start_time: float,
        was_cancelled: bool
    ) -> Solution:
        """Build Solution object from computation results."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return Solution(
            final=final,
            pieces=context.pieces,
            was_cancelled=was_cancelled,
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                states_explored=context.states_explored,
                pruned_branches=context.pruned_branches,
                strategy_name=self.name
            )
        )
