"""
Fixed-horizon forecasts driven by future regressor values.
"""

import pandas as pd
from typing import Dict, Optional

from .evaluation import mae, mape, rmse
from .models.base import ForecastModel


def forecast_with_exog(
    model: ForecastModel,
    future_exog: pd.DataFrame,
    steps: Optional[int] = None,
    alpha: float = 0.05,
    verbose: bool = False,
) -> pd.DataFrame:
    """
    Forecast one step per row of the future regressor matrix.

    The horizon is the number of rows in `future_exog`. If `steps` is given
    it must equal that number.

    Args:
        model: Fitted model with exogenous regressors
        future_exog: Regressor values for each forecast step, indexed by date
        steps: Expected forecast horizon (default: None, the rows of `future_exog`)
        alpha: Significance level of the prediction intervals (default: 0.05)
        verbose: Whether to print the forecast table (default: False)

    Returns:
        DataFrame with columns "forecast", "lower" and "upper", indexed like
        `future_exog`
    """
    if len(future_exog) == 0:
        raise ValueError("future_exog must have at least one row.")
    if steps is None:
        steps = len(future_exog)
    elif steps != len(future_exog):
        raise ValueError(
            f"Horizon of {steps} steps does not match the {len(future_exog)} rows of future_exog."
        )

    forecast = model.forecast(steps=steps, exog=future_exog, alpha=alpha)

    if verbose:
        level = round((1 - alpha) * 100)
        print(f"\n{steps}-step forecast ({level}% prediction intervals):")
        print(forecast.to_string())

    return forecast


def evaluate_forecast(
    forecast: pd.DataFrame, actuals: pd.Series
) -> Dict[str, float]:
    """
    Score a forecast against observed values.

    Args:
        forecast: Output of `forecast_with_exog`
        actuals: Observed values, aligned by position with the forecast rows

    Returns:
        Dictionary with keys "rmse", "mae", "mape" and "coverage" (share of
        actuals inside the prediction interval)
    """
    if len(actuals) != len(forecast):
        raise ValueError(
            f"Forecast has {len(forecast)} rows but {len(actuals)} actuals were given."
        )

    y_true = pd.Series(actuals).to_numpy(dtype=float)
    y_pred = forecast["forecast"].to_numpy(dtype=float)
    inside = (y_true >= forecast["lower"].to_numpy()) & (y_true <= forecast["upper"].to_numpy())

    return {
        "rmse": rmse(y_true, y_pred),
        "mae": mae(y_true, y_pred),
        "mape": mape(y_true, y_pred),
        "coverage": float(inside.mean()),
    }
