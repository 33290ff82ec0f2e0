"""Tests for period normalization."""

import json
from datetime import timedelta

import pytest

from wxcal.forecast.normalize import (
    TemperatureCoercionError,
    coerce_temperature,
    normalize_period,
    normalize_periods,
)
from wxcal.models.forecast import ForecastPeriod, ForecastResponse, RawForecastPeriod


class TestCoerceTemperature:
    """Tests for temperature coercion."""

    def test_integer(self):
        assert coerce_temperature(72) == 72

    def test_negative_integer(self):
        assert coerce_temperature(-5) == -5

    def test_integer_string(self):
        assert coerce_temperature("72") == 72
        assert coerce_temperature(" -3 ") == -3

    def test_integral_float(self):
        assert coerce_temperature(72.0) == 72

    def test_fractional_float_fails(self):
        with pytest.raises(TemperatureCoercionError):
            coerce_temperature(72.5)

    def test_non_numeric_string_fails(self):
        """Test that the error names the value and period."""
        with pytest.raises(TemperatureCoercionError, match="'warm'.*Tonight"):
            coerce_temperature("warm", "Tonight")

    def test_missing_fails(self):
        with pytest.raises(TemperatureCoercionError):
            coerce_temperature(None)

    def test_boolean_fails(self):
        with pytest.raises(TemperatureCoercionError):
            coerce_temperature(True)

    def test_is_value_error(self):
        assert issubclass(TemperatureCoercionError, ValueError)


class TestNormalizePeriod:
    """Tests for turning wire periods into calendar periods."""

    def test_populates_period(self, forecast_response: ForecastResponse):
        """Test that a normalized period carries the wire fields."""
        scheduled = normalize_period(forecast_response.periods[0])

        assert scheduled.period == ForecastPeriod(
            is_populated=True,
            name="This Afternoon",
            short_forecast="Sunny",
            detailed_forecast="Sunny, with a high near 75.",
            temperature=75,
            temperature_unit="F",
        )
        assert scheduled.is_daytime is True
        assert scheduled.start_time.isoformat() == "2024-06-01T14:00:00-04:00"
        assert scheduled.end_time.isoformat() == "2024-06-01T18:00:00-04:00"

    def test_utc_offset_hours(self, forecast_response: ForecastResponse):
        scheduled = normalize_period(forecast_response.periods[1])
        assert scheduled.utc_offset_hours == -4.0
        assert scheduled.start_time.utcoffset() == timedelta(hours=-4)

    def test_text_passes_through(self):
        """Test that text fields are not validated or altered."""
        raw = RawForecastPeriod(
            name="",
            start_time="2024-06-01T06:00:00+00:00",
            end_time="2024-06-01T18:00:00+00:00",
            is_daytime=True,
            temperature="20",
            temperature_unit="C",
            short_forecast="  Slight Chance Rain  ",
            detailed_forecast="",
        )
        period = normalize_period(raw).period

        assert period.short_forecast == "  Slight Chance Rain  "
        assert period.temperature == 20
        assert period.temperature_unit == "C"

    def test_bad_temperature_is_fatal(self, forecast_json: dict):
        forecast_json["properties"]["periods"][2]["temperature"] = "N/A"
        response = ForecastResponse.model_validate(forecast_json)

        with pytest.raises(TemperatureCoercionError, match="Sunday"):
            normalize_periods(response.periods)

    def test_preserves_order(self, forecast_response: ForecastResponse):
        names = [p.period.name for p in normalize_periods(forecast_response.periods)]
        assert names == ["This Afternoon", "Tonight", "Sunday", "Sunday Night", "Monday"]

    @pytest.mark.parametrize("value", [True, False, [75], {"value": 75}])
    def test_wire_temperature_kept_raw(self, forecast_json: dict, value):
        """Test that a JSON boolean or container reaches the normalizer unchanged."""
        forecast_json["properties"]["periods"][0]["temperature"] = value
        response = ForecastResponse.model_validate_json(json.dumps(forecast_json))

        assert response.periods[0].temperature == value
        assert type(response.periods[0].temperature) is type(value)
        with pytest.raises(TemperatureCoercionError, match="This Afternoon"):
            normalize_period(response.periods[0])
