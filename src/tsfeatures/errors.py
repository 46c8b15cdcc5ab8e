"""Exceptions raised by transformers.

Every error carries the transformer kind (``component``) and, when raised
from inside a :class:`~tsfeatures.transformers.pipeline.Pipeline`, the index
of the failing stage (``stage``) so the fault can be localised.
"""

from __future__ import annotations


class TransformerError(Exception):
    """Base class for all transformer failures."""

    def __init__(
        self, message: str, *, component: str | None = None, stage: int | None = None
    ) -> None:
        super().__init__(message)
        self.component = component
        self.stage = stage

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage is not None:
            return f"[stage {self.stage}] {message}"
        return message


class ShapeError(TransformerError):
    """Input data has the wrong type or dimensionality for the transformer."""


class NotFittedError(TransformerError):
    """``transform`` was called before ``fit``."""


class EmptyColumnError(TransformerError):
    """An aggregate was requested over a column with no valid values."""


class StageError(TransformerError):
    """A pipeline stage failed with an error that is not a ``TransformerError``.

    The original exception is chained as ``__cause__``.
    """
