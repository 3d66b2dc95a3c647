"""Exploratory analysis and ARIMA(X) forecasting of wind turbine power."""

__version__ = "0.1.0"
