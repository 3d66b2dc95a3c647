"""
Plots for the exploratory analysis and model diagnostics.

Every function returns the `matplotlib` Figure it draws; saving and
showing is left to the caller.
"""

from typing import List, Optional

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure
from statsmodels.graphics.tsaplots import plot_acf, plot_pacf
from statsmodels.tsa.seasonal import DecomposeResult

from . import config


def plot_series(series: pd.Series, title: Optional[str] = None, ylabel: Optional[str] = None) -> Figure:
    """Line plot of a date-indexed series."""
    fig, ax = plt.subplots(figsize=(12, 4))
    ax.plot(series.index, series.values, linewidth=0.8)
    ax.set_title(title or str(series.name))
    ax.set_xlabel("Date")
    ax.set_ylabel(ylabel or str(series.name))
    ax.grid(alpha=0.3)
    fig.tight_layout()
    return fig


def plot_histograms(df: pd.DataFrame, columns: Optional[List[str]] = None, bins: int = 30) -> Figure:
    """
    Histogram of each column, side by side.

    Args:
        df: `pandas.DataFrame`
        columns: Columns to plot (default: power and covariates of a daily summary)
        bins: Number of histogram bins (default: 30)
    """
    columns = [config.DAY_ACTIVE_POWER] + config.COVARIATE_COLUMNS if columns is None else columns
    fig, axes = plt.subplots(1, len(columns), figsize=(4 * len(columns), 4), squeeze=False)
    for ax, col in zip(axes[0], columns):
        ax.hist(df[col].dropna(), bins=bins, edgecolor="white")
        ax.set_title(col)
    fig.tight_layout()
    return fig


def plot_scatter_matrix(
    df: pd.DataFrame,
    target: str = config.DAY_ACTIVE_POWER,
    covariates: Optional[List[str]] = None,
) -> Figure:
    """Scatter plot of the target against each covariate."""
    covariates = config.COVARIATE_COLUMNS if covariates is None else covariates
    fig, axes = plt.subplots(1, len(covariates), figsize=(4 * len(covariates), 4), squeeze=False, sharey=True)
    for ax, col in zip(axes[0], covariates):
        ax.scatter(df[col], df[target], s=6, alpha=0.5)
        ax.set_xlabel(col)
    axes[0][0].set_ylabel(target)
    fig.tight_layout()
    return fig


def plot_acf_pacf(series: pd.Series, lags: int = 40, title: Optional[str] = None) -> Figure:
    """ACF and PACF of a series, side by side."""
    values = series.dropna()
    lags = min(lags, len(values) // 2 - 1)
    name = title or str(series.name)

    fig, axes = plt.subplots(1, 2, figsize=(14, 4))
    plot_acf(values, lags=lags, ax=axes[0], title=f"ACF - {name}")
    plot_pacf(values, lags=lags, ax=axes[1], title=f"PACF - {name}")
    fig.tight_layout()
    return fig


def plot_decomposition(result: DecomposeResult) -> Figure:
    """Observed, trend, seasonal and residual components of a decomposition."""
    fig = result.plot()
    fig.set_size_inches(12, 8)
    fig.tight_layout()
    return fig


def plot_residual_check(model, lags: int = 40) -> Figure:
    """
    Residual time plot, residual ACF and residual histogram of a fitted model.

    Args:
        model: Fitted `ARIMAXModel`
        lags: Number of lags in the ACF plot (default: 40)
    """
    resid = model.resid.iloc[model.order[1]:]
    lags = min(lags, len(resid) // 2 - 1)

    fig = plt.figure(figsize=(12, 7))
    ax_time = fig.add_subplot(2, 1, 1)
    ax_acf = fig.add_subplot(2, 2, 3)
    ax_hist = fig.add_subplot(2, 2, 4)

    ax_time.plot(resid.index, resid.values, linewidth=0.8)
    ax_time.axhline(0, color="grey", linewidth=0.8)
    ax_time.set_title(f"Residuals from {model.label}")

    plot_acf(resid, lags=lags, ax=ax_acf, title="ACF")
    ax_hist.hist(resid, bins=30, edgecolor="white")
    ax_hist.set_title("Histogram")

    fig.tight_layout()
    return fig


def plot_forecast(
    history: pd.Series,
    forecast: pd.DataFrame,
    actuals: Optional[pd.Series] = None,
    n_history: Optional[int] = 60,
    title: Optional[str] = None,
) -> Figure:
    """
    Plot the end of the observed series followed by the forecast and its interval.

    Args:
        history: Observed series the model was fitted to
        forecast: Output of `forecast_with_exog`
        actuals: Observed values for the forecast dates (optional)
        n_history: Number of final observations to show (default: 60, None for all)
        title: Plot title (optional)
    """
    if n_history is not None:
        history = history.iloc[-n_history:]

    fig, ax = plt.subplots(figsize=(12, 4))
    ax.plot(history.index, history.values, color="black", linewidth=0.8, label="Observed")
    ax.plot(forecast.index, forecast["forecast"], color="tab:blue", marker="o", label="Forecast")
    ax.fill_between(
        forecast.index, forecast["lower"], forecast["upper"],
        color="tab:blue", alpha=0.2, label="Prediction interval",
    )
    if actuals is not None:
        ax.plot(forecast.index, pd.Series(actuals).values, color="tab:red", marker="x",
                linestyle="none", label="Actual")
    ax.set_title(title or "Forecast")
    ax.set_xlabel("Date")
    ax.legend()
    ax.grid(alpha=0.3)
    fig.tight_layout()
    return fig
