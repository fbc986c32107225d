"""
Solver Package - Move generation and search for the shepherd puzzle.

This package computes the legal moves of a configuration and searches
for the shortest move sequence that solves a puzzle. Strategies are
pluggable and selected by name.

Public API:
    - Board: Static grid, walls and vertical wrap
    - Piece: Piece record with stacking and herd links
    - Puzzle: Complete puzzle definition
    - Configuration: Immutable search state with its path
    - Direction, Move: Directions and applied moves
    - MoveGenerator: Successor generation rules
    - Solution: Result of a search
    - SolutionMetrics: Performance statistics
    - SolutionContext: Per-solve memo and bound
    - SolverStrategy: Abstract base for strategies
    - generate_alternatives(): Reduced starting configurations
    - create_strategy(): Factory function
    - get_strategy_names(): List available strategies
    - get_strategy_info(): Get strategy metadata

Usage:
    from shepherd.solver import create_strategy, SolutionContext

    context = SolutionContext(puzzle=puzzle)
    strategy = create_strategy("dfs")
    solution = strategy.solve(context)

    if solution.is_solved:
        print(f"Solved in {solution.step}: {', '.join(solution.actions)}")
"""

# Core data structures
from .board import Board, EndTile, Position, Wall
from .pieces import Piece, Pieces, canonical_hash
from .puzzle import Puzzle
from .state import Configuration
from .move import Direction, Move, DIRECTIONS
from .rules import MoveGenerator
from .solution import Solution, SolutionMetrics
from .context import SolutionContext
from .alternatives import PIECE_LIMITS, generate_alternatives, needs_alternatives

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
    resolve_strategy_name,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "Board",
    "EndTile",
    "Position",
    "Wall",
    "Piece",
    "Pieces",
    "canonical_hash",
    "Puzzle",
    "Configuration",
    "Direction",
    "Move",
    "DIRECTIONS",
    "MoveGenerator",
    "Solution",
    "SolutionMetrics",
    "SolutionContext",
    # Alternatives
    "PIECE_LIMITS",
    "generate_alternatives",
    "needs_alternatives",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
    "resolve_strategy_name",
]
