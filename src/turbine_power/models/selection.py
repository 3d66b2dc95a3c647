"""Order selection and model comparison for ARIMAX models."""

import warnings

import pandas as pd
import pmdarima as pm
from statsmodels.tools.sm_exceptions import ConvergenceWarning
from typing import Dict, List, Optional, Tuple

from .. import config
from ..diagnostics import residual_diagnostics
from .arimax import ARIMAXModel


def fit_with_convergence_check(
    model: ARIMAXModel,
    endog: pd.Series,
    exog: Optional[pd.DataFrame] = None,
    verbose: bool = False,
) -> ARIMAXModel:
    """
    Fit a model and record whether the optimiser converged.

    Convergence warnings are collected instead of shown and stored on
    `model.convergence_warnings`. Other warnings are passed on.

    Args:
        model: Unfitted `ARIMAXModel`
        endog: Endogenous variable. `pandas.Series` with datetime index.
        exog: Exogenous variables with the same index (default: None)
        verbose: If True, print the convergence warnings

    Returns:
        model: The fitted model
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        model.fit(endog, exog)

    model.convergence_warnings = []
    for w in caught:
        if issubclass(w.category, ConvergenceWarning):
            model.convergence_warnings.append(str(w.message))
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)

    if verbose and model.convergence_warnings:
        print(f"  Warning: {model.label} did not converge ({model.convergence_warnings[0]})")

    return model


def auto_arima(
    endog: pd.Series,
    exog: Optional[pd.DataFrame] = None,
    max_p: int = config.MAX_P,
    max_d: int = config.MAX_D,
    max_q: int = config.MAX_Q,
    d: Optional[int] = None,
    criterion: str = "aicc",
    verbose: bool = False,
) -> ARIMAXModel:
    """
    Select an ARIMA(X) order with `pmdarima` and return the fitted model.

    `pmdarima.auto_arima` estimates the differencing order with KPSS tests
    (unless `d` is given) and runs a stepwise search over (p, q). The
    selected order is refitted as an `ARIMAXModel`, so the result can be
    compared with the hand-picked models.

    Args:
        endog: Endogenous variable. `pandas.Series` with datetime index.
        exog: Exogenous variables with the same index (default: None)
        max_p: Maximum autoregressive order (default: 5)
        max_d: Maximum differencing order (default: 2)
        max_q: Maximum moving average order (default: 5)
        d: Fixed differencing order, skipping the KPSS tests (default: None)
        criterion: 'aic', 'aicc', 'bic' or 'hqic' (default: 'aicc')
        verbose: If True, print each candidate and its score

    Returns:
        best: Fitted `ARIMAXModel`
    """
    if criterion not in ("aic", "aicc", "bic", "hqic"):
        raise ValueError(f"criterion must be 'aic', 'aicc', 'bic' or 'hqic', got '{criterion}'.")

    if verbose:
        print(f"Order search with p <= {max_p}, d <= {max_d}, q <= {max_q} ({criterion})")

    search = pm.auto_arima(
        endog,
        X=exog,
        d=d,
        max_p=max_p,
        max_d=max_d,
        max_q=max_q,
        seasonal=False,
        test="kpss",
        information_criterion=criterion,
        stepwise=True,
        suppress_warnings=True,
        error_action="ignore",
        trace=verbose,
    )

    best = fit_with_convergence_check(
        ARIMAXModel(order=search.order), endog, exog, verbose=verbose
    )

    if verbose:
        print(f"Selected {best.label} with {criterion}={getattr(best, criterion):.2f}")

    return best


def compare_models(
    models: Dict[str, ARIMAXModel], lag: int = config.LJUNG_BOX_LAG
) -> pd.DataFrame:
    """
    Tabulate fit statistics and residual diagnostics of fitted models.

    Args:
        models: Fitted models keyed by a display name
        lag: Ljung-Box lag for the residual test (default: 10)

    Returns:
        `pandas.DataFrame` with one row per model and columns order, exog,
        aic, aicc, bic, llf, lb_stat and lb_pvalue
    """
    rows = []
    for name, model in models.items():
        lb = residual_diagnostics(model, lag=lag)
        rows.append({
            "model": name,
            "order": model.order,
            "exog": ", ".join(model.exog_names),
            "aic": model.aic,
            "aicc": model.aicc,
            "bic": model.bic,
            "llf": model.llf,
            "lb_stat": lb["statistic"],
            "lb_pvalue": lb["p_value"],
        })
    return pd.DataFrame(rows).set_index("model")


def drop_insignificant_regressors(
    model: ARIMAXModel,
    endog: pd.Series,
    exog: pd.DataFrame,
    alpha: float = config.ALPHA,
    verbose: bool = False,
) -> Tuple[ARIMAXModel, List[str]]:
    """
    Remove insignificant exogenous regressors one at a time.

    The regressor with the largest p-value above `alpha` is dropped and the
    model is refitted with the same order, until every remaining regressor
    is significant or none are left.

    Args:
        model: Fitted `ARIMAXModel` with exogenous regressors
        endog: Endogenous variable the model was fitted to
        exog: Exogenous variables the model was fitted to
        alpha: Significance level (default: 0.05)
        verbose: If True, print each dropped regressor

    Returns:
        model: Refitted model (the input model if nothing was dropped)
        dropped: Names of the dropped regressors, in order
    """
    dropped = []
    while model.exog_names:
        table = model.coefficient_table(alpha).loc[model.exog_names]
        insignificant = table[~table["significant"]]
        if insignificant.empty:
            break

        worst = insignificant["p_value"].idxmax()
        dropped.append(worst)
        if verbose:
            print(f"Dropping '{worst}' (p={insignificant.loc[worst, 'p_value']:.3f})")

        kept = [c for c in model.exog_names if c != worst]
        model = ARIMAXModel(order=model.order, trend=model.trend).fit(
            endog, exog[kept] if kept else None
        )

    return model, dropped
