"""Time series forecasting models."""

from .base import ForecastModel
from .arimax import ARIMAXModel
from .selection import (
    auto_arima,
    compare_models,
    drop_insignificant_regressors,
    fit_with_convergence_check,
)

__all__ = [
    "ForecastModel",
    "ARIMAXModel",
    "auto_arima",
    "compare_models",
    "drop_insignificant_regressors",
    "fit_with_convergence_check",
]
