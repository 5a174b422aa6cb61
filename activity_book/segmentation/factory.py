"""
Segmentation Factory

Registries and factories for flood-fill backends and label strategies.
"""

from typing import Any, Dict, List, Type

from .base import FillBackend, LabelStrategy


# Global registries
_FILL_BACKENDS: Dict[str, Type[FillBackend]] = {}
_LABEL_STRATEGIES: Dict[str, Type[LabelStrategy]] = {}


def register_fill_backend(cls: Type[FillBackend]) -> Type[FillBackend]:
    """
    Decorator to register a flood-fill backend class.

    Usage:
        @register_fill_backend
        class MyFill(FillBackend):
            name = "my_fill"
            ...
    """
    if not issubclass(cls, FillBackend):
        raise TypeError(f"{cls} must be a subclass of FillBackend")
    _FILL_BACKENDS[cls.name] = cls
    return cls


def register_label_strategy(cls: Type[LabelStrategy]) -> Type[LabelStrategy]:
    """Decorator to register a label assignment strategy class."""
    if not issubclass(cls, LabelStrategy):
        raise TypeError(f"{cls} must be a subclass of LabelStrategy")
    _LABEL_STRATEGIES[cls.name] = cls
    return cls


def create_fill_backend(name: str) -> FillBackend:
    """
    Create a flood-fill backend by name.

    Args:
        name: Backend name ("queue" or "opencv")

    Returns:
        Backend instance

    Raises:
        ValueError: If backend name not found
    """
    if name not in _FILL_BACKENDS:
        available = ", ".join(_FILL_BACKENDS.keys())
        raise ValueError(f"Unknown fill backend: {name}. Available: {available}")
    return _FILL_BACKENDS[name]()


def create_label_strategy(name: str, **kwargs: Any) -> LabelStrategy:
    """
    Create a label strategy by name.

    Args:
        name: Strategy name (e.g., "random", "round_robin", "adjacent")
        **kwargs: Additional arguments passed to strategy constructor

    Returns:
        Strategy instance

    Raises:
        ValueError: If strategy name not found
    """
    if name not in _LABEL_STRATEGIES:
        available = ", ".join(_LABEL_STRATEGIES.keys())
        raise ValueError(f"Unknown label strategy: {name}. Available: {available}")
    return _LABEL_STRATEGIES[name](**kwargs)


def available_fill_backends() -> List[str]:
    return list(_FILL_BACKENDS.keys())


def available_label_strategies() -> List[str]:
    return list(_LABEL_STRATEGIES.keys())
