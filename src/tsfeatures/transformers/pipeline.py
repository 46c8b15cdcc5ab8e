"""Pipeline — chain transformers in sequence.

``fit`` builds a fresh transformer from every configured prototype, fits it
on the running dataset and transforms that dataset for the next stage.  The
last stage is fit only, so it may be a model whose "transform" (prediction)
is invoked separately.  ``transform`` replays every fitted stage in order
without refitting.

Prototypes are never fitted themselves: each ``fit`` call produces new,
independent stage instances via :func:`create_transformer`.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from pydantic import Field, model_validator

from tsfeatures.errors import StageError, TransformerError
from tsfeatures.registry import register_transformer
from tsfeatures.transformers.base import Transformer, TransformerConfig, create_transformer
from tsfeatures.transformers.imputer import Imputer
from tsfeatures.transformers.one_hot import OneHotEncoder

logger = logging.getLogger(__name__)


@register_transformer("pipeline")
class Pipeline(Transformer):
    """Fit and transform an ordered list of transformer prototypes."""

    class Config(TransformerConfig):
        # Transformers to chain in sequence.
        transformers: list[Transformer] = Field(
            default_factory=lambda: [OneHotEncoder(), Imputer()]
        )
        # Per-stage overrides, applied to the transformer at the same index.
        transformer_args: list[dict[str, Any] | None] | None = None

        @model_validator(mode="after")
        def _args_match_transformers(self):
            if self.transformer_args is not None and len(self.transformer_args) != len(
                self.transformers
            ):
                raise ValueError(
                    f"transformer_args has {len(self.transformer_args)} entries "
                    f"but there are {len(self.transformers)} transformers"
                )
            return self

    def fit(self, data: Any, labels: Any = None) -> Pipeline:
        self.model = None
        transformers = self._config.transformers
        stage_args = self._config.transformer_args or [None] * len(transformers)
        last = len(transformers) - 1

        current = copy.deepcopy(data)
        fitted: list[Transformer] = []
        for index, (prototype, args) in enumerate(zip(transformers, stage_args)):
            try:
                transformer = create_transformer(prototype, args)
                transformer.fit(current, labels)
                if index < last:
                    current = transformer.transform(current)
            except Exception as exc:
                error = _stage_failure(exc, index, prototype.name, "fit")
                if error is exc:
                    raise
                raise error from exc
            logger.info("%s: stage %d (%s) fitted", self.name, index, transformer.name)
            fitted.append(transformer)

        self.model = {
            "transformers": fitted,
            "transformer_args": self._config.transformer_args,
        }
        return self

    def transform(self, data: Any) -> Any:
        model = self._check_fitted()
        current = copy.deepcopy(data)
        for index, transformer in enumerate(model["transformers"]):
            try:
                current = transformer.transform(current)
            except Exception as exc:
                error = _stage_failure(exc, index, transformer.name, "transform")
                if error is exc:
                    raise
                raise error from exc
        return current


def make_pipeline(
    *stages: Transformer, transformer_args: list[dict[str, Any] | None] | None = None
) -> Pipeline:
    """Build a :class:`Pipeline` from positional stages.

    >>> make_pipeline(Imputer(), OneHotEncoder())  # doctest: +SKIP
    """
    return Pipeline({"transformers": list(stages), "transformer_args": transformer_args})


def _stage_failure(
    exc: Exception, index: int, component: str, phase: str
) -> TransformerError:
    """Attach the stage index to *exc*, wrapping foreign errors in ``StageError``."""
    if isinstance(exc, TransformerError):
        if exc.stage is None:
            exc.stage = index
        error = exc
    else:
        error = StageError(
            f"{type(exc).__name__}: {exc}", component=component, stage=index
        )
    logger.error(
        "Pipeline stage %d (%s) failed during %s: %s", index, component, phase, exc
    )
    return error
