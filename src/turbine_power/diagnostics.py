"""
Statistical diagnostics for time series model selection.

The tests here are decision aids: each returns the test statistic and
p-value as a labelled `pandas.Series` for printing, and none of them
stops the analysis.
"""

import pandas as pd
from typing import Optional
from pmdarima.arima import ndiffs
from statsmodels.stats.diagnostic import acorr_ljungbox
from statsmodels.tsa.seasonal import DecomposeResult, seasonal_decompose
from statsmodels.tsa.stattools import adfuller

from . import config


def ljung_box_test(
    series: pd.Series, lag: int = config.LJUNG_BOX_LAG, model_df: int = 0
) -> pd.Series:
    """
    Ljung-Box test for white noise at a fixed lag.

    The null hypothesis is that the series is serially uncorrelated up to
    `lag`. A small p-value indicates autocorrelation.

    Args:
        series: Series to test. Missing values are dropped.
        lag: Number of lags included in the statistic (default: 10)
        model_df: Degrees of freedom used by a fitted model, subtracted from
            `lag` when testing residuals (default: 0)

    Returns:
        `pandas.Series` with fields statistic, p_value, lag and df
    """
    values = pd.Series(series).dropna()
    if lag < 1 or lag >= len(values):
        raise ValueError(
            f"lag must be between 1 and {len(values) - 1}, got {lag}."
        )

    result = acorr_ljungbox(values, lags=[lag], model_df=model_df, return_df=True)
    return pd.Series(
        {
            "statistic": float(result["lb_stat"].iloc[0]),
            "p_value": float(result["lb_pvalue"].iloc[0]),
            "lag": lag,
            "df": lag - model_df,
        },
        name="Ljung-Box",
    )


def unit_root_test(
    series: pd.Series,
    regression: str = "c",
    maxlag: int = config.ADF_LAG,
    autolag: Optional[str] = None,
) -> pd.Series:
    """
    Augmented Dickey-Fuller unit root test.

    The default specification has a drift (constant) and no trend, with a
    fixed number of lagged differences. The null hypothesis is that the
    series has a unit root. A small p-value indicates stationarity.

    Args:
        series: Series to test. Missing values are dropped.
        regression: Deterministic terms: 'n', 'c' (drift), 'ct' or 'ctt'
            (default: 'c')
        maxlag: Number of lagged differences, or the upper bound of the
            search when `autolag` is set (default: 1)
        autolag: Lag selection method ('AIC', 'BIC', 't-stat') or None to
            use exactly `maxlag` lags (default: None)

    Returns:
        `pandas.Series` with fields statistic, p_value, used_lag, n_obs and
        one critical value per significance level
    """
    values = pd.Series(series).dropna()
    adf_stat, p_value, used_lag, n_obs, critical_values = adfuller(
        values, maxlag=maxlag, regression=regression, autolag=autolag
    )[:5]

    result = {
        "statistic": float(adf_stat),
        "p_value": float(p_value),
        "used_lag": int(used_lag),
        "n_obs": int(n_obs),
    }
    for level, value in critical_values.items():
        result[f"critical_{level}"] = float(value)

    return pd.Series(result, name=f"ADF ({regression})")


def estimate_differencing(
    series: pd.Series,
    max_d: int = config.MAX_D,
    alpha: float = config.ALPHA,
) -> int:
    """
    Estimate the number of differences needed to make a series stationary.

    Uses repeated KPSS level-stationarity tests (`pmdarima.arima.ndiffs`),
    the same estimate `auto_arima` makes when no `d` is given.

    Args:
        series: Series to test
        max_d: Maximum number of differences (default: 2)
        alpha: Significance level (default: 0.05)

    Returns:
        d: Number of differences, between 0 and `max_d`
    """
    values = pd.Series(series).dropna().to_numpy(dtype=float)
    return int(ndiffs(values, alpha=alpha, test="kpss", max_d=max_d))


def seasonal_decomposition(
    series: pd.Series,
    period: int = config.SEASONAL_PERIOD,
    model: str = "additive",
) -> DecomposeResult:
    """
    Decompose a series into trend, seasonal and residual components.

    Args:
        series: Regular series without missing values
        period: Length of the seasonal cycle (default: 365)
        model: 'additive' or 'multiplicative' (default: 'additive')

    Returns:
        `statsmodels` DecomposeResult
    """
    if len(series) < 2 * period:
        raise ValueError(
            f"Need at least two full cycles ({2 * period} values) to decompose, "
            f"got {len(series)}."
        )
    return seasonal_decompose(series, model=model, period=period)


def residual_diagnostics(model, lag: int = config.LJUNG_BOX_LAG) -> pd.Series:
    """
    Ljung-Box test on the residuals of a fitted ARIMA model.

    The degrees of freedom are reduced by the number of ARMA parameters
    (p + q). If `lag` does not exceed p + q it is raised to p + q + 1.

    Args:
        model: Fitted `ARIMAXModel`
        lag: Number of lags included in the statistic (default: 10)

    Returns:
        `pandas.Series` as returned by `ljung_box_test`
    """
    p, _, q = model.order
    model_df = p + q
    lag = max(lag, model_df + 1)

    # The first d residuals are not defined for an integrated model
    resid = model.resid.iloc[model.order[1]:]
    result = ljung_box_test(resid, lag=lag, model_df=model_df)
    result.name = f"Ljung-Box residuals {model.label}"
    return result
