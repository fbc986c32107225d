"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .exhaustive import ExhaustiveStrategy
from .breadth_first import BreadthFirstStrategy

__all__ = [
    "ExhaustiveStrategy",
    "BreadthFirstStrategy",
]
