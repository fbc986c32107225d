"""
Breadth-First Strategy - Level-by-level search for the shortest solution.

Explores all configurations reachable in n moves before any reachable
in n + 1, so the first solved configuration met is a shortest one. Uses
the same memo and bound as the depth-first search and serves as a
cross-check for it.
"""

import logging
import time
from typing import List, Optional

from ..base import SolverStrategy
from ..context import SolutionContext
from ..factory import register_strategy
from ..solution import Solution
from ..state import Configuration

logger = logging.getLogger(__name__)


@register_strategy
class BreadthFirstStrategy(SolverStrategy):
    """
    Breadth-first search bounded by the puzzle's optimal step count.

    Memory grows with the widest level, so this is best suited to
    small puzzles or to verifying the depth-first results.
    """
    name = "bfs"
    aliases = ("breadth-first",)
    description = "Breadth-first (level order) - Shortest path, more memory"

    def solve(self, context: SolutionContext) -> Solution:
        """
        Compute the shortest solution within the context's bound.

        Args:
            context: Solution context with puzzle, memo and bound

        Returns:
            Solution with the solved configuration (or none) and metrics
        """
        start_time = time.perf_counter()

        frontier: List[Configuration] = [self.root(context)]
        final: Optional[Configuration] = None
        was_cancelled = False

        while frontier and final is None:
            level: List[Configuration] = []
            for state in frontier:
                context.states_explored += 1

                if state.step <= context.bound and self.is_solved(context, state):
                    context.record_solution(state.step)
                    final = state
                    break

                if state.step >= context.bound:
                    context.pruned_branches += 1
                    continue

                if self._check_cancelled(context):
                    was_cancelled = True
                    break

                level.extend(self.expand(context, state))

            if was_cancelled:
                break

            if final is None and level:
                depth = level[0].step
                logger.debug(f"[BFS] Depth {depth}: {len(level)} configurations")
                context.report_progress(
                    min(0.99, depth / max(1, context.bound)),
                    f"depth {depth}, {len(level)} configurations"
                )
            frontier = level

        if final is not None:
            logger.info(
                f"[BFS] {context.puzzle.number}: solved in {final.step}, "
                f"{context.states_explored} states explored"
            )
        else:
            logger.info(
                f"[BFS] {context.puzzle.number}: no solution within {context.bound}"
            )

        return self._build_solution(context, final, start_time, was_cancelled)
