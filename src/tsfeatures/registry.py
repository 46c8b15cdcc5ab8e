"""Decorator-based plugin registry for transformers.

Concrete classes register themselves at import time via
``@register_transformer("statifier")``.  The engine resolves string keys from
the run config to classes via ``get_transformer("statifier")`` — it never
imports a concrete class directly.
"""

from __future__ import annotations

_transformer_registry: dict[str, type] = {}


def register_transformer(name: str):
    """Class decorator that registers a transformer under *name*."""

    def decorator(cls: type) -> type:
        if name in _transformer_registry:
            raise ValueError(
                f"Duplicate transformer registration: {name!r} is already "
                f"registered to {_transformer_registry[name].__name__}"
            )
        _transformer_registry[name] = cls
        return cls

    return decorator


def get_transformer(name: str) -> type:
    """Return the transformer class registered under *name*."""
    try:
        return _transformer_registry[name]
    except KeyError:
        available = ", ".join(sorted(_transformer_registry)) or "(none)"
        raise KeyError(
            f"Unknown transformer {name!r}. Available: {available}"
        ) from None


def list_registered() -> dict[str, dict[str, str]]:
    """Return all registered transformers keyed by category.

    Returns a dict like::

        {"transformers": {"statifier": "Statifier", "imputer": "Imputer", ...}}
    """
    return {
        "transformers": {k: v.__name__ for k, v in sorted(_transformer_registry.items())},
    }
