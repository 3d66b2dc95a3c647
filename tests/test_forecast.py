import numpy as np
import pandas as pd
import pytest

from turbine_power.evaluation import mae, mape, rmse
from turbine_power.forecast import evaluate_forecast, forecast_with_exog
from turbine_power.models import ARIMAXModel
from turbine_power.utils import exog_frame, holdout_split, to_time_series


@pytest.fixture
def fitted_model_and_future():
    n_obs, n_future = 150, 5
    rng = np.random.default_rng(seed=7)
    dates = pd.date_range("2018-01-01", periods=n_obs + n_future, freq="D")
    exog = pd.DataFrame(
        {
            "ambient_temperature": rng.normal(25, 4, size=n_obs + n_future),
            "wind_speed": rng.uniform(2, 12, size=n_obs + n_future),
        },
        index=dates,
    )
    y = 500 + 10 * exog["ambient_temperature"] + 80 * exog["wind_speed"] + rng.normal(0, 20, size=n_obs + n_future)
    endog = y.iloc[:n_obs].rename("day_active_power")

    model = ARIMAXModel(order=(1, 0, 1)).fit(endog, exog.iloc[:n_obs])
    return model, exog.iloc[n_obs:], y.iloc[n_obs:]


class TestForecastWithExog:
    def test_horizon_from_exog(self, fitted_model_and_future):
        model, future_exog, _ = fitted_model_and_future
        forecast = forecast_with_exog(model, future_exog)
        assert len(forecast) == 5
        assert forecast.index.equals(future_exog.index)
        assert (forecast["lower"] <= forecast["forecast"]).all()
        assert (forecast["forecast"] <= forecast["upper"]).all()

    def test_matches_model_forecast(self, fitted_model_and_future):
        model, future_exog, _ = fitted_model_and_future
        expected = model.forecast(steps=5, exog=future_exog, alpha=0.1)
        result = forecast_with_exog(model, future_exog, steps=5, alpha=0.1)
        pd.testing.assert_frame_equal(result, expected)

    def test_forecast_follows_regressors(self, fitted_model_and_future):
        """Higher future wind speed gives a higher forecast."""
        model, future_exog, _ = fitted_model_and_future
        windy = future_exog.assign(wind_speed=future_exog["wind_speed"] + 5)
        base = forecast_with_exog(model, future_exog)
        high = forecast_with_exog(model, windy)
        assert (high["forecast"] > base["forecast"]).all()

    def test_steps_mismatch(self, fitted_model_and_future):
        model, future_exog, _ = fitted_model_and_future
        with pytest.raises(ValueError, match="does not match"):
            forecast_with_exog(model, future_exog, steps=3)

    def test_empty_exog(self, fitted_model_and_future):
        model, future_exog, _ = fitted_model_and_future
        with pytest.raises(ValueError, match="at least one row"):
            forecast_with_exog(model, future_exog.iloc[:0])

    def test_verbose(self, fitted_model_and_future, capsys):
        model, future_exog, _ = fitted_model_and_future
        forecast_with_exog(model, future_exog, verbose=True)
        captured = capsys.readouterr()
        assert "5-step forecast (95% prediction intervals)" in captured.out


class TestEvaluateForecast:
    def test_scores(self):
        forecast = pd.DataFrame(
            {
                "forecast": [10.0, 20.0, 30.0, 40.0],
                "lower": [8.0, 18.0, 28.0, 38.0],
                "upper": [12.0, 22.0, 32.0, 42.0],
            }
        )
        actuals = pd.Series([11.0, 20.0, 35.0, 40.0])

        scores = evaluate_forecast(forecast, actuals)

        assert scores["mae"] == pytest.approx(1.5)
        assert scores["rmse"] == pytest.approx(np.sqrt(26 / 4))
        assert scores["mape"] == pytest.approx((100 / 11 + 0 + 100 * 5 / 35 + 0) / 4)
        assert scores["coverage"] == pytest.approx(0.75)

    def test_length_mismatch(self):
        forecast = pd.DataFrame({"forecast": [1.0], "lower": [0.0], "upper": [2.0]})
        with pytest.raises(ValueError, match="actuals"):
            evaluate_forecast(forecast, pd.Series([1.0, 2.0]))

    def test_realistic_forecast(self, fitted_model_and_future):
        model, future_exog, actuals = fitted_model_and_future
        forecast = forecast_with_exog(model, future_exog)
        scores = evaluate_forecast(forecast, actuals)
        assert scores["mae"] < 100
        assert 0.0 <= scores["coverage"] <= 1.0


class TestMetrics:
    def test_perfect_prediction(self):
        y = np.array([1.0, 2.0, 3.0])
        assert rmse(y, y) == 0.0
        assert mae(y, y) == 0.0
        assert mape(y, y) == 0.0

    def test_rmse_and_mae(self):
        y_true = np.array([0.0, 0.0])
        y_pred = np.array([3.0, -4.0])
        assert rmse(y_true, y_pred) == pytest.approx(np.sqrt(12.5))
        assert mae(y_true, y_pred) == pytest.approx(3.5)

    def test_mape_skips_zeros(self):
        assert mape(np.array([0.0, 10.0]), np.array([5.0, 12.0])) == pytest.approx(20.0)

    def test_mape_all_zero(self):
        assert np.isnan(mape(np.zeros(3), np.ones(3)))


class TestHoldoutBoundary:
    @pytest.fixture
    def summary_with_boundary_gap(self):
        """100 consecutive days, a 10-day gap, then 5 more days."""
        dates = pd.date_range("2018-01-01", periods=100, freq="D").append(
            pd.date_range("2018-04-21", periods=5, freq="D")
        )
        rng = np.random.default_rng(seed=8)
        return pd.DataFrame(
            {
                "date": dates,
                "day_active_power": rng.normal(1000, 50, size=len(dates)),
                "ambient_temperature": rng.normal(25, 3, size=len(dates)),
                "wind_direction": rng.uniform(0, 360, size=len(dates)),
                "wind_speed": rng.uniform(2, 12, size=len(dates)),
            }
        )

    def test_gap_detected_before_split(self, summary_with_boundary_gap):
        with pytest.raises(ValueError, match="10 missing days"):
            to_time_series(summary_with_boundary_gap)

    def test_split_halves_hide_gap(self, summary_with_boundary_gap):
        """Each half is gap-free, so only the forecast dates reveal the gap."""
        df_fit, df_holdout = holdout_split(summary_with_boundary_gap, n_holdout=5)
        model = ARIMAXModel(order=(1, 0, 0)).fit(to_time_series(df_fit), exog_frame(df_fit))
        with pytest.raises(ValueError, match="forecast covers 2018-04-11 to 2018-04-15"):
            forecast_with_exog(model, exog_frame(df_holdout))

    def test_filled_series_split_after_building(self, summary_with_boundary_gap):
        y = to_time_series(summary_with_boundary_gap, fill_method="interpolate")
        X = exog_frame(summary_with_boundary_gap, fill_method="interpolate")
        y_fit, y_holdout = holdout_split(y, n_holdout=5)
        X_fit, X_future = holdout_split(X, n_holdout=5)

        model = ARIMAXModel(order=(1, 0, 0)).fit(y_fit, X_fit)
        forecast = forecast_with_exog(model, X_future)

        assert forecast.index[0] == y_fit.index[-1] + pd.Timedelta(days=1)
        assert forecast.index.equals(y_holdout.index)
