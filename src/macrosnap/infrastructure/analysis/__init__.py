"""Series normalization and derived indicator calculations."""

from macrosnap.infrastructure.analysis.dollar_index import (
    BASKET_CURRENCIES,
    BASKET_WEIGHTS,
    compute_dollar_index,
)
from macrosnap.infrastructure.analysis.series import (
    downsample_monthly,
    normalize_series,
    splice_spot,
)

__all__ = [
    "BASKET_CURRENCIES",
    "BASKET_WEIGHTS",
    "compute_dollar_index",
    "downsample_monthly",
    "normalize_series",
    "splice_spot",
]
