"""Transformer subpackage — imports trigger @register_transformer decorators."""

from tsfeatures.transformers.base import Transformer, create_transformer  # noqa: F401
from tsfeatures.transformers.statifier import Statifier  # noqa: F401
from tsfeatures.transformers.one_hot import OneHotEncoder  # noqa: F401
from tsfeatures.transformers.imputer import Imputer  # noqa: F401
from tsfeatures.transformers.pipeline import Pipeline, make_pipeline  # noqa: F401
from tsfeatures.transformers.wrapper import Wrapper  # noqa: F401
