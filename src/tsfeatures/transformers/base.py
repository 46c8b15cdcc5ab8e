"""Base transformer interface.

A transformer pairs a validated configuration with fitted state.  ``fit``
inspects data and records the state, ``transform`` uses that state to return
a *new* dataset.  Neither may mutate its input, which keeps every transformer
trivially testable and composable.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from tsfeatures.errors import NotFittedError


class TransformerConfig(BaseModel):
    """Base configuration model.

    Subclasses declare the recognised options and their defaults.  Caller
    supplied keys override the defaults; unknown keys are kept unvalidated.
    """

    model_config = ConfigDict(extra="allow", frozen=True, arbitrary_types_allowed=True)


class Transformer(abc.ABC):
    """Fit on data, then transform data using the fitted state.

    Lifecycle:
        1. __init__(config)   — merge *config* over the component defaults.
        2. fit(data, labels)  — compute and record fitted state (``model``).
        3. transform(data)    — return a new dataset (mandatory fitted state).

    A later ``fit`` call replaces the fitted state.
    """

    Config: type[TransformerConfig] = TransformerConfig

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        self._config = self.Config.model_validate(dict(config or {}))
        self.model: dict[str, Any] | None = None

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    def config(self) -> TransformerConfig:
        return self._config

    @property
    def args(self) -> dict[str, Any]:
        """Plain-dict view of the configuration, unknown keys included."""
        return dict(self._config)

    def __repr__(self) -> str:
        return f"{self.name}({self.args!r})"

    # -- contract ------------------------------------------------------------

    @abc.abstractmethod
    def fit(self, data: Any, labels: Any = None) -> Transformer:
        """Record fitted state from *data* and return ``self``."""
        ...

    @abc.abstractmethod
    def transform(self, data: Any) -> Any:
        """Return a *new* dataset built from *data* and the fitted state.

        Implementations must **never** mutate *data* in place.
        """
        ...

    def fit_transform(self, data: Any, labels: Any = None) -> Any:
        """Convenience method: ``fit`` then ``transform`` on the same data."""
        return self.fit(data, labels).transform(data)

    # -- helpers -------------------------------------------------------------

    def _check_fitted(self) -> dict[str, Any]:
        if self.model is None:
            raise NotFittedError(
                f"{self.name} must be fit before transform", component=self.name
            )
        return self.model


def create_transformer(
    prototype: Transformer, args: Mapping[str, Any] | None = None
) -> Transformer:
    """Build a fresh, unfitted transformer of the same kind as *prototype*.

    The new instance is configured with the prototype's configuration merged
    with *args* (*args* wins).  The prototype itself is left untouched.
    """
    new_args = prototype.args
    if args is not None:
        new_args.update(args)
    return type(prototype)(new_args)
