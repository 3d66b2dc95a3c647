"""Base interface for forecasting models."""

from abc import ABC, abstractmethod
import pandas as pd
from typing import Optional


class ForecastModel(ABC):
    """
    Base class for forecasting models.
    """

    @abstractmethod
    def fit(self, endog: pd.Series, exog: Optional[pd.DataFrame] = None) -> "ForecastModel":
        """
        Fit model parameters to observed data.

        Args:
            endog: Endogenous variable (target). `pandas.Series` with datetime index.
            exog: Exogenous variables (regressors). `pandas.DataFrame` with datetime index.
                  Default: None.

        Returns:
            self: The fitted model
        """
        pass

    @abstractmethod
    def forecast(
        self,
        steps: int,
        exog: Optional[pd.DataFrame] = None,
        alpha: float = 0.05
    ) -> pd.DataFrame:
        """
        Make a forecast.

        Args:
            steps: Number of steps to forecast ahead
            exog: Exogenous variables for the forecast horizon.
                  `pandas.DataFrame` with exactly `steps` rows.
                  Required if the model was fitted with exogenous variables.
                  Default: None.
            alpha: Significance level of the prediction intervals.
                   Default: 0.05 (95% intervals).

        Returns:
            forecast: `pandas.DataFrame` with columns "forecast", "lower" and
                "upper", one row per step

        Example:
            # Forecast from end of training data
            model.fit(y_train, X_train)
            forecast = model.forecast(steps=5, exog=X_future)
        """
        pass
