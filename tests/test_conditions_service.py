import datetime as dt
import unittest

from airaware import conditions_service
from airaware.conditions_service import DEFAULT_ESTIMATED_AQI, get_air_quality, get_forecast
from airaware.data_sources import CallableEnvironmentDataSource
from airaware.domain import AQICategory, PollutantReading, WeatherForecast, WeatherObservation


def _unused(*_args, **_kwargs):
    raise AssertionError("unexpected provider call")


def _source(reading=None, forecast=None):
    return CallableEnvironmentDataSource(
        latest_reading=lambda *_a, **_k: reading,
        current_weather=_unused,
        weather_forecast=(lambda *_a, **_k: forecast) if forecast is not None else _unused,
    )


class TestAirQuality(unittest.TestCase):
    def test_estimates_from_station_reading(self):
        reading = PollutantReading(pm25=35.4, location="Station 7", source="OpenAQ")
        report = get_air_quality(1.0, 2.0, data_source=_source(reading))
        self.assertEqual(report.aqi, 100)
        self.assertIs(report.category, AQICategory.MODERATE)
        self.assertEqual(report.reading.location, "Station 7")

    def test_missing_pm25_defaults_to_50(self):
        reading = PollutantReading(pm10=40.0, location="Station 7", source="OpenAQ")
        report = get_air_quality(1.0, 2.0, data_source=_source(reading))
        self.assertEqual(report.aqi, 50)
        self.assertIs(report.category, AQICategory.GOOD)

    def test_no_station_uses_default_estimate(self):
        report = get_air_quality(1.0, 2.0, data_source=_source(None))
        self.assertEqual(report.aqi, DEFAULT_ESTIMATED_AQI)
        self.assertEqual(report.reading.source, "default")
        self.assertEqual(report.reading.location, "Estimated")
        self.assertEqual(report.reading.pm25, 15)

    def test_without_injected_source_uses_factory(self):
        reading = PollutantReading(pm25=12.0, location="Station 3", source="OpenAQ")
        original = conditions_service.build_data_source
        calls = []

        def fake_factory(*args, **kwargs):
            calls.append(args)
            return _source(reading)

        conditions_service.build_data_source = fake_factory
        try:
            report = get_air_quality(1.0, 2.0)
        finally:
            conditions_service.build_data_source = original
        self.assertEqual(len(calls), 1)
        self.assertEqual(report.aqi, 50)


class TestForecast(unittest.TestCase):
    def test_projects_in_location_offset(self):
        # 13:00 UTC is 08:00 at UTC-5, inside the morning rush band.
        ts = dt.datetime(2024, 6, 1, 13, tzinfo=dt.timezone.utc)
        obs = WeatherObservation(
            timestamp_millis=int(ts.timestamp() * 1000),
            temperature_c=20.0,
            humidity_percent=50,
            wind_speed_mps=2.0,
            weather_description="haze",
        )
        forecast = WeatherForecast(observations=[obs] * 6, utc_offset_seconds=-5 * 3600)

        points = get_forecast(1.0, 2.0, 90, data_source=_source(forecast=forecast))
        self.assertEqual(len(points), 4)
        self.assertEqual(points[0].hour_label, "8 AM")
        self.assertEqual(points[0].aqi, 110)

    def test_respects_horizon(self):
        start = dt.datetime(2024, 6, 1, 0, tzinfo=dt.timezone.utc)
        observations = [
            WeatherObservation(
                timestamp_millis=int((start + dt.timedelta(hours=3 * i)).timestamp() * 1000),
                temperature_c=20.0,
                humidity_percent=50,
                wind_speed_mps=2.0,
                weather_description="clear sky",
            )
            for i in range(6)
        ]
        forecast = WeatherForecast(observations=observations, utc_offset_seconds=0)

        points = get_forecast(1.0, 2.0, 90, horizon=2, data_source=_source(forecast=forecast))
        self.assertEqual(len(points), 2)
        self.assertEqual([p.timestamp_millis for p in points], [o.timestamp_millis for o in observations[:2]])

    def test_empty_forecast_yields_no_points(self):
        forecast = WeatherForecast(observations=[], utc_offset_seconds=0)
        self.assertEqual(get_forecast(1.0, 2.0, 90, horizon=2, data_source=_source(forecast=forecast)), [])


if __name__ == "__main__":
    unittest.main()
