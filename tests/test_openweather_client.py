import unittest

from airaware.config import settings
from airaware.data_sources import openweather_client
from airaware.errors import ConfigurationError, DataSourceError


class DummyResp:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        pass

    def json(self):
        return self._payload


def _make_current_payload():
    return {
        "name": "Springfield",
        "main": {"temp": 21.5, "humidity": 64, "pressure": 1012},
        "wind": {"speed": 3.6, "deg": 220},
        "weather": [{"description": "scattered clouds", "icon": "03d"}],
    }


def _make_forecast_payload():
    return {
        "city": {"name": "Springfield", "timezone": -18000},
        "list": [
            {
                "dt": 1717232400,
                "main": {"temp": 24.1, "humidity": 70},
                "wind": {"speed": 2.4},
                "weather": [{"description": "few clouds"}],
            },
            {
                "dt": 1717243200,
                "main": {"temp": 26.3, "humidity": 55},
                "wind": {"speed": 5.2},
                "weather": [{"description": "clear sky"}],
            },
        ],
    }


class TestOpenWeatherClient(unittest.TestCase):
    def setUp(self):
        self._orig_session = openweather_client.session
        self._orig_key = settings.openweather_api_key
        settings.openweather_api_key = "test-key"

    def tearDown(self):
        openweather_client.session = self._orig_session
        settings.openweather_api_key = self._orig_key

    def test_fetch_current_weather(self):
        payload = _make_current_payload()
        openweather_client.session = type("S", (), {"get": lambda *a, **k: DummyResp(payload)})()

        current = openweather_client.fetch_current_weather(39.8, -89.6)
        self.assertEqual(current.temperature_c, 22)
        self.assertEqual(current.humidity_percent, 64)
        self.assertEqual(current.wind_speed_mps, 3.6)
        self.assertEqual(current.wind_direction_deg, 220)
        self.assertEqual(current.description, "scattered clouds")
        self.assertEqual(current.location, "Springfield")

    def test_fetch_weather_forecast(self):
        payload = _make_forecast_payload()
        openweather_client.session = type("S", (), {"get": lambda *a, **k: DummyResp(payload)})()

        forecast = openweather_client.fetch_weather_forecast(39.8, -89.6)
        self.assertEqual(forecast.utc_offset_seconds, -18000)
        self.assertEqual(len(forecast.observations), 2)
        first = forecast.observations[0]
        self.assertEqual(first.timestamp_millis, 1717232400000)
        self.assertEqual(first.humidity_percent, 70)
        self.assertEqual(first.weather_description, "few clouds")

    def test_missing_api_key(self):
        settings.openweather_api_key = None
        with self.assertRaises(ConfigurationError):
            openweather_client.fetch_weather_forecast(0, 0)

    def test_malformed_forecast(self):
        with self.assertRaises(DataSourceError):
            openweather_client.parse_forecast({"list": [{"dt": 1, "main": {}}]})

    def test_out_of_range_humidity_is_rejected(self):
        payload = _make_forecast_payload()
        payload["list"][0]["main"]["humidity"] = 140
        with self.assertRaises(DataSourceError):
            openweather_client.parse_forecast(payload)


if __name__ == "__main__":
    unittest.main()
