"""
Default settings for the turbine power analysis.

Column names, the excluded year and model settings used throughout the
package. Every function takes these as keyword defaults, so they can be
overridden per call or through the flags of `scripts/run_analysis.py`.
"""

# Canonical column names of an observation
TIMESTAMP = "timestamp"
ACTIVE_POWER = "active_power"
AMBIENT_TEMPERATURE = "ambient_temperature"
WIND_DIRECTION = "wind_direction"
WIND_SPEED = "wind_speed"

SENSOR_COLUMNS = [ACTIVE_POWER, AMBIENT_TEMPERATURE, WIND_DIRECTION, WIND_SPEED]
COVARIATE_COLUMNS = [AMBIENT_TEMPERATURE, WIND_DIRECTION, WIND_SPEED]

# Raw column names found in turbine SCADA exports
# ("AmbientTemperatue" is misspelled in the source data)
RAW_COLUMN_ALIASES = {
    "ActivePower": ACTIVE_POWER,
    "AmbientTemperatue": AMBIENT_TEMPERATURE,
    "AmbientTemperature": AMBIENT_TEMPERATURE,
    "WindDirection": WIND_DIRECTION,
    "WindSpeed": WIND_SPEED,
    "Timestamp": TIMESTAMP,
    "Unnamed: 0": TIMESTAMP,
}

# Daily summary columns
DATE = "date"
DAY_ACTIVE_POWER = "day_active_power"

# The first year of the reference dataset only holds a few hours of data
EXCLUDED_YEARS = (2017,)

# Time series settings
FREQ = "D"
SEASONAL_PERIOD = 365

# Diagnostics
LJUNG_BOX_LAG = 10
ADF_LAG = 1
ALPHA = 0.05

# Models and forecasting
FORECAST_HORIZON = 5
MAX_P = 5
MAX_D = 2
MAX_Q = 5
