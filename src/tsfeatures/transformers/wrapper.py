"""Wrapper — embed a single transformer behind the uniform contract.

``fit`` builds a fresh inner transformer from the prototype plus overrides and
fits it; ``transform`` delegates to that fitted instance.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field

from tsfeatures.registry import register_transformer
from tsfeatures.transformers.base import Transformer, TransformerConfig, create_transformer
from tsfeatures.transformers.one_hot import OneHotEncoder

logger = logging.getLogger(__name__)


@register_transformer("wrapper")
class Wrapper(Transformer):
    """Delegate fit/transform to one transformer built from a prototype."""

    class Config(TransformerConfig):
        transformer: Transformer = Field(default_factory=OneHotEncoder)
        transformer_args: dict[str, Any] | None = None

    def fit(self, data: Any, labels: Any = None) -> Wrapper:
        self.model = None
        transformer_args = self._config.transformer_args
        transformer = create_transformer(self._config.transformer, transformer_args)
        transformer.fit(data, labels)
        logger.info("%s: fitted inner %s", self.name, transformer.name)

        self.model = {
            "transformer": transformer,
            "transformer_args": transformer.args if transformer_args is not None else None,
        }
        return self

    def transform(self, data: Any) -> Any:
        model = self._check_fitted()
        return model["transformer"].transform(data)
