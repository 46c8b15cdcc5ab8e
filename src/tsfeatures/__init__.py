"""Statistical feature extraction for gappy time series."""

from tsfeatures.errors import (  # noqa: F401
    EmptyColumnError,
    NotFittedError,
    ShapeError,
    StageError,
    TransformerError,
)
from tsfeatures.transformers import (  # noqa: F401
    Imputer,
    OneHotEncoder,
    Pipeline,
    Statifier,
    Transformer,
    Wrapper,
    create_transformer,
    make_pipeline,
)
