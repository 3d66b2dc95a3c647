"""ARIMA model with optional exogenous variables (ARIMAX)."""

import numpy as np
import pandas as pd
import pandas.api.types as ptypes
from statsmodels.tsa.arima.model import ARIMA
from typing import List, Optional, Tuple

from .base import ForecastModel


class ARIMAXModel(ForecastModel):
    """
    ARIMA(p, d, q) model with optional exogenous regressors (ARIMAX).

    Parameters are estimated by maximum likelihood with `statsmodels`.

    Attributes:
        order: (p, d, q) order of the model
        trend: Deterministic trend passed to `statsmodels` ARIMA. None uses a
            constant for models without differencing and no trend otherwise.
        exog_names: Names of the exogenous regressors seen in fit()
        results_: Fitted `statsmodels` ARIMAResults
    """

    def __init__(self, order: Tuple[int, int, int] = (0, 0, 0), trend: Optional[str] = None):
        """
        Create an `ARIMAXModel` instance.

        Args:
            order: (p, d, q) order. Default: `(0, 0, 0)`.
            trend: Deterministic trend ('n', 'c', 't', 'ct') or None for the
                `statsmodels` default. Default: None.
        """
        if len(order) != 3 or any(int(k) < 0 for k in order):
            raise ValueError(f"order must be three non-negative integers, got {order}.")
        self.order = tuple(int(k) for k in order)
        self.trend = trend
        self.exog_names: List[str] = []
        self._fitted = False  # indicate whether parameters have been fitted yet

    def fit(self, endog: pd.Series, exog: Optional[pd.DataFrame] = None, method: Optional[str] = None):
        """
        Fit model parameters to observed data.
        Returns the fitted model.

        Args:
            endog: Endogenous variable. `pandas.Series` with datetime index.
            exog: Exogenous variables.
                If provided, should be a `pandas.DataFrame` with the same index as `endog`.
                Default: None.
            method: Estimation method passed to `statsmodels`. Default: None ('statespace').
        """
        assert np.all(ptypes.is_datetime64_any_dtype(endog.index)), "endog must have datetime index."
        if exog is not None:
            assert np.all(ptypes.is_datetime64_any_dtype(exog.index)), "exog must have datetime index."

        if exog is not None and isinstance(exog, pd.Series):
            exog = exog.to_frame()

        if exog is not None and len(exog) != len(endog):
            raise ValueError(
                f"Dimensions in endog ({len(endog)}) and exog ({len(exog)}) do not match."
            )

        if exog is not None and not exog.index.equals(endog.index):
            raise ValueError("endog and exog must share the same index.")

        if endog.isna().any() or (exog is not None and exog.isna().any().any()):
            raise ValueError("endog and exog must not contain missing values.")

        self.exog_names = list(exog.columns) if exog is not None else []
        self.endog_name = endog.name

        model = ARIMA(endog, exog=exog, order=self.order, trend=self.trend)
        self.results_ = model.fit(method=method)
        self._fitted = True

        return self

    def _check_fitted(self, caller: str):
        if not self._fitted:
            raise ValueError(f"Model must be fitted before calling {caller}(). Call fit() first.")

    def forecast(
        self,
        steps: int,
        exog: Optional[pd.DataFrame] = None,
        alpha: float = 0.05
    ) -> pd.DataFrame:
        """
        Make a forecast with prediction intervals.

        Args:
            steps: Number of steps to forecast ahead
            exog: Exogenous variables for forecast horizon.
                  Should be a `pandas.DataFrame` with exactly `steps` rows and the
                  columns seen in fit(). Required if the model has exogenous variables.
                  Default: None.
            alpha: Significance level of the prediction intervals. Default: 0.05.

        Returns:
            forecast: `pandas.DataFrame` with columns "forecast", "lower", "upper".
                Indexed by the index of `exog` if it is a datetime index (which must
                match the forecast dates), otherwise
                by the forecast index from `statsmodels`.

        Example:
            model = ARIMAXModel(order=(1, 0, 1)).fit(y_train, X_train)
            forecast = model.forecast(steps=5, exog=X_future)
        """
        self._check_fitted("forecast")

        if steps < 1:
            raise ValueError(f"steps must be positive, got {steps}.")

        exog_values = None
        if self.exog_names:
            if exog is None:
                raise ValueError(
                    f"Model was fitted with exogenous variables {self.exog_names}, "
                    "so exog must be provided for the forecast horizon."
                )
            if isinstance(exog, pd.Series):
                exog = exog.to_frame()
            if len(exog) != steps:
                raise ValueError(
                    f"exog must have exactly {steps} rows, got {len(exog)}."
                )
            missing = [c for c in self.exog_names if c not in exog.columns]
            if missing:
                raise ValueError(f"exog is missing column(s) {missing}.")
            if exog[self.exog_names].isna().any().any():
                raise ValueError("exog must not contain missing values.")
            exog_values = exog[self.exog_names].to_numpy(dtype=float)
        elif exog is not None:
            raise ValueError("Model was fitted without exogenous variables, but exog was given.")

        prediction = self.results_.get_forecast(steps=steps, exog=exog_values)
        mean = prediction.predicted_mean
        conf_int = np.asarray(prediction.conf_int(alpha=alpha))

        if exog is not None and ptypes.is_datetime64_any_dtype(exog.index):
            if ptypes.is_datetime64_any_dtype(mean.index) and not exog.index.equals(mean.index):
                raise ValueError(
                    f"exog covers {exog.index[0].date()} to {exog.index[-1].date()}, "
                    f"but the forecast covers {mean.index[0].date()} to {mean.index[-1].date()}."
                )
            index = exog.index
        else:
            index = mean.index

        return pd.DataFrame(
            {"forecast": np.asarray(mean), "lower": conf_int[:, 0], "upper": conf_int[:, 1]},
            index=index,
        )

    def coefficient_table(self, alpha: float = 0.05) -> pd.DataFrame:
        """
        Coefficient estimates with z-tests of significance.

        Args:
            alpha: Significance level for the "significant" column. Default: 0.05.

        Returns:
            `pandas.DataFrame` indexed by parameter name with columns
            estimate, std_error, z, p_value and significant
        """
        self._check_fitted("coefficient_table")
        res = self.results_
        table = pd.DataFrame(
            {
                "estimate": np.asarray(res.params),
                "std_error": np.asarray(res.bse),
                "z": np.asarray(res.zvalues),
                "p_value": np.asarray(res.pvalues),
            },
            index=res.model.param_names,
        )
        table["significant"] = table["p_value"] < alpha
        return table

    def significant_regressors(self, alpha: float = 0.05) -> List[str]:
        """Exogenous regressors whose coefficients are significant at level `alpha`."""
        table = self.coefficient_table(alpha)
        return [name for name in self.exog_names if table.loc[name, "significant"]]

    def get_params(self) -> pd.Series:
        """
        Get the estimated model parameters.

        Returns:
            params: `pandas.Series` indexed by parameter name
        """
        self._check_fitted("get_params")
        return pd.Series(np.asarray(self.results_.params), index=self.results_.model.param_names)

    @property
    def resid(self) -> pd.Series:
        """Model residuals from fitting."""
        self._check_fitted("resid")
        return pd.Series(self.results_.resid)

    @property
    def fittedvalues(self) -> pd.Series:
        """In-sample one-step-ahead predictions."""
        self._check_fitted("fittedvalues")
        return pd.Series(self.results_.fittedvalues)

    @property
    def aic(self) -> float:
        self._check_fitted("aic")
        return float(self.results_.aic)

    @property
    def aicc(self) -> float:
        self._check_fitted("aicc")
        return float(self.results_.aicc)

    @property
    def bic(self) -> float:
        self._check_fitted("bic")
        return float(self.results_.bic)

    @property
    def hqic(self) -> float:
        self._check_fitted("hqic")
        return float(self.results_.hqic)

    @property
    def llf(self) -> float:
        self._check_fitted("llf")
        return float(self.results_.llf)

    @property
    def label(self) -> str:
        """Short description, e.g. 'ARIMAX(1,0,1)[ambient_temperature, wind_speed]'."""
        p, d, q = self.order
        if self.exog_names:
            return f"ARIMAX({p},{d},{q})[{', '.join(self.exog_names)}]"
        return f"ARIMA({p},{d},{q})"

    def summary(self):
        """Full `statsmodels` summary of the fitted model."""
        self._check_fitted("summary")
        return self.results_.summary()

    def __repr__(self):
        return f"ARIMAXModel(order={self.order}, trend={self.trend!r}, exog={self.exog_names})"
