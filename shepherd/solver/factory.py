"""
Strategy Factory Module - Registry of search strategies by name.

Strategies register under their ``name`` and any ``aliases`` they
declare. Lookups are case-insensitive.
"""

from typing import Dict, List, Type

from .base import SolverStrategy


DEFAULT_STRATEGY = "dfs"

# Canonical name -> class, in registration order
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}
# Alias -> canonical name
_ALIASES: Dict[str, str] = {}


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Class decorator adding a strategy to the registry.

    Usage:
        @register_strategy
        class IterativeDeepening(SolverStrategy):
            name = "iddfs"
            aliases = ("iterative",)

    Raises:
        ValueError: If the name or an alias is already taken by another class
    """
    for key in (cls.name, *cls.aliases):
        key = key.lower()
        owner = _ALIASES.get(key)
        if owner is not None and _STRATEGIES[owner] is not cls:
            raise ValueError(f"Strategy name '{key}' already registered by {owner}")
        _ALIASES[key] = cls.name
    _STRATEGIES[cls.name] = cls
    return cls


def resolve_strategy_name(name: str) -> str:
    """
    Map a name or alias to the canonical strategy name.

    Raises:
        ValueError: If nothing is registered under that name
    """
    canonical = _ALIASES.get(name.lower())
    if canonical is None:
        available = ", ".join(_STRATEGIES.keys())
        raise ValueError(f"Unknown strategy: {name}. Available: {available}")
    return canonical


def create_strategy(name: str) -> SolverStrategy:
    """
    Instantiate a registered strategy.

    Args:
        name: Strategy name or alias (e.g., "dfs", "breadth-first")

    Returns:
        New strategy instance
    """
    return _STRATEGIES[resolve_strategy_name(name)]()


def get_strategy_names() -> List[str]:
    """Canonical names, in registration order."""
    return list(_STRATEGIES.keys())


def get_strategy_info() -> List[Dict[str, str]]:
    """
    Describe every registered strategy.

    Returns:
        Dicts with 'name', 'aliases' (comma separated) and 'description'
    """
    return [
        {
            "name": cls.name,
            "aliases": ", ".join(cls.aliases),
            "description": cls.description,
        }
        for cls in _STRATEGIES.values()
    ]


def get_default_strategy_name() -> str:
    """DEFAULT_STRATEGY when registered, otherwise the first registered name."""
    if DEFAULT_STRATEGY in _STRATEGIES:
        return DEFAULT_STRATEGY
    return next(iter(_STRATEGIES), "")
