"""
Script to run the turbine power analysis from raw data to forecast.

The steps follow one another in a fixed order:
1. Load, clean and impute the raw observations, aggregate them to days
2. Descriptive plots of daily power and the covariates
3. White-noise and unit-root tests on daily power
4. A progression of ARIMA(X) fits, compared by coefficient significance
   and residual diagnostics
5. A forecast over the held-out days, driven by their covariates

Figures and tables are written to the output directory.
"""

import argparse
import os

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from turbine_power import config  # noqa: E402
from turbine_power.data.pipeline import create_daily_dataset  # noqa: E402
from turbine_power.diagnostics import (  # noqa: E402
    ljung_box_test,
    residual_diagnostics,
    seasonal_decomposition,
    unit_root_test,
)
from turbine_power.forecast import evaluate_forecast, forecast_with_exog  # noqa: E402
from turbine_power.models import (  # noqa: E402
    ARIMAXModel,
    auto_arima,
    compare_models,
    drop_insignificant_regressors,
)
from turbine_power.utils import exog_frame, holdout_split, to_time_series  # noqa: E402
from turbine_power import visualization as viz  # noqa: E402


def save_figure(fig, output_dir, name, verbose=False):
    """Save a figure as PNG and close it."""
    path = os.path.join(output_dir, f"{name}.png")
    fig.savefig(path, dpi=120)
    plt.close(fig)
    print(f"  Saved {path}") if verbose else None


def report_model(model, lag, alpha):
    """Print coefficient significance and the residual Ljung-Box test."""
    print(f"\n--- {model.label} ---")
    print(model.coefficient_table(alpha).round(4).to_string())
    print(f"AIC={model.aic:.2f}  AICc={model.aicc:.2f}  BIC={model.bic:.2f}")
    print(residual_diagnostics(model, lag=lag).to_string())


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Exploratory analysis and ARIMAX forecast of daily turbine power"
    )
    parser.add_argument(
        "--data-path",
        type=str,
        default="data/raw/Turbine_Data.csv",
        help="Raw turbine CSV file",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="output",
        help="Directory for figures and tables (default: output)",
    )
    parser.add_argument(
        "--horizon",
        type=int,
        default=config.FORECAST_HORIZON,
        help="Number of held-out days to forecast (default: 5)",
    )
    parser.add_argument(
        "--exclude-year",
        type=int,
        action="append",
        default=None,
        help="Year to drop from the daily summary, repeatable (default: 2017)",
    )
    parser.add_argument(
        "--ljung-box-lag",
        type=int,
        default=config.LJUNG_BOX_LAG,
        help="Lag of the Ljung-Box tests (default: 10)",
    )
    parser.add_argument(
        "--alpha",
        type=float,
        default=config.ALPHA,
        help="Significance level (default: 0.05)",
    )
    parser.add_argument(
        "--fill-method",
        choices=["interpolate", "forward_fill"],
        default=None,
        help="Fill days without observations instead of failing on gaps",
    )
    parser.add_argument(
        "--skip-auto",
        action="store_true",
        help="Skip the automatic order search",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print progress messages",
    )

    args = parser.parse_args(argv)
    exclude_years = tuple(args.exclude_year) if args.exclude_year else config.EXCLUDED_YEARS
    os.makedirs(args.output_dir, exist_ok=True)

    # 1. Data
    daily = create_daily_dataset(
        args.data_path,
        exclude_years=exclude_years,
        output_path=os.path.join(args.output_dir, "daily_summary.csv"),
        verbose=args.verbose,
    )
    print("\n=== Daily Summary ===")
    print(daily.drop(columns=["year", "month", "day"]).describe().to_string())

    # Gaps are checked on the full summary, the split comes after
    y_full = to_time_series(daily, fill_method=args.fill_method)
    X_full = exog_frame(daily, fill_method=args.fill_method)
    y, actuals = holdout_split(y_full, args.horizon)
    X_all, X_future_all = holdout_split(X_full, args.horizon)

    # 2. Descriptive plots
    print("\n=== Descriptive Plots ===")
    save_figure(viz.plot_series(y, title="Daily active power"), args.output_dir, "daily_power", args.verbose)
    save_figure(viz.plot_histograms(daily), args.output_dir, "histograms", args.verbose)
    save_figure(viz.plot_scatter_matrix(daily), args.output_dir, "power_vs_covariates", args.verbose)
    save_figure(viz.plot_acf_pacf(y), args.output_dir, "acf_pacf", args.verbose)
    try:
        decomposition = seasonal_decomposition(y, period=config.SEASONAL_PERIOD)
        save_figure(viz.plot_decomposition(decomposition), args.output_dir, "decomposition", args.verbose)
    except ValueError as e:
        print(f"Warning: {e}")

    # 3. Diagnostics
    print("\n=== Diagnostics ===")
    print(ljung_box_test(y, lag=args.ljung_box_lag).to_string())
    print(unit_root_test(y, regression="c").to_string())

    # 4. Models
    print("\n=== Models ===")
    models = {}
    for order in [(0, 0, 0), (1, 0, 0), (1, 0, 1)]:
        model = ARIMAXModel(order=order).fit(y, X_all)
        models[model.label] = model
        report_model(model, args.ljung_box_lag, args.alpha)
    arma_model = model

    if not args.skip_auto:
        auto_model = auto_arima(y, X_all, verbose=args.verbose)
        models[f"auto {auto_model.label}"] = auto_model
        report_model(auto_model, args.ljung_box_lag, args.alpha)

    # Covariates that stay significant in the ARMA(1,1) fit go into the final model
    reduced_model, dropped = drop_insignificant_regressors(
        arma_model, y, X_all, alpha=args.alpha, verbose=args.verbose,
    )
    covariates = reduced_model.exog_names
    print(f"\nInsignificant regressors: {dropped}")
    print(f"Kept regressors: {covariates}")

    X_final = X_all[covariates] if covariates else None
    X_future = X_future_all[covariates] if covariates else None
    final_model = ARIMAXModel(order=(2, 0, 2)).fit(y, X_final)
    models[final_model.label] = final_model
    report_model(final_model, args.ljung_box_lag, args.alpha)
    save_figure(viz.plot_residual_check(final_model), args.output_dir, "residuals", args.verbose)

    comparison = compare_models(models, lag=args.ljung_box_lag)
    print("\n=== Model Comparison ===")
    print(comparison.round(3).to_string())
    comparison.to_csv(os.path.join(args.output_dir, "model_comparison.csv"))

    # 5. Forecast
    print("\n=== Forecast ===")
    if X_future is not None:
        forecast = forecast_with_exog(
            final_model, X_future, steps=args.horizon, alpha=args.alpha, verbose=True
        )
    else:
        forecast = final_model.forecast(steps=args.horizon, alpha=args.alpha)
        print(forecast.to_string())
    scores = evaluate_forecast(forecast, actuals)
    print("\nForecast scores on held-out days:")
    for name, value in scores.items():
        print(f"  {name}: {value:.3f}")

    forecast.assign(actual=actuals.values).to_csv(os.path.join(args.output_dir, "forecast.csv"))
    save_figure(
        viz.plot_forecast(y, forecast, actuals, title=f"{args.horizon}-day forecast from {final_model.label}"),
        args.output_dir, "forecast", args.verbose,
    )


if __name__ == "__main__":
    main()
