import datetime as dt
import unittest
from zoneinfo import ZoneInfo

import requests

from weather_app.config import Settings
from weather_app.errors import GENERIC_ERROR_MESSAGE, MalformedResponse
from weather_app.weather_service import (
    build_weather_result,
    format_local_time,
    lookup_weather,
    round_half_up,
)
from tests.fakes import SUNRISE, SUNSET, DummyResp, FakeSession, make_weather_payload

UTC = ZoneInfo("UTC")


def _settings(**overrides):
    values = {"openweather_api_key": "test-key", "display_timezone": "UTC"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestRounding(unittest.TestCase):
    def test_rounds_to_nearest(self):
        self.assertEqual(round_half_up(15.6), 16)
        self.assertEqual(round_half_up(15.4), 15)
        self.assertEqual(round_half_up(-3.7), -4)

    def test_ties_go_up(self):
        self.assertEqual(round_half_up(14.5), 15)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(-2.5), -2)

    def test_non_finite_is_malformed(self):
        with self.assertRaises(MalformedResponse):
            round_half_up(float("nan"))


class TestFormatLocalTime(unittest.TestCase):
    def test_formats_twelve_hour_clock(self):
        self.assertEqual(format_local_time(SUNRISE, UTC), "10:13:20 PM")
        self.assertEqual(format_local_time(SUNSET, UTC), "8:13:20 AM")

    def test_midnight_and_noon(self):
        midnight = dt.datetime(2024, 1, 1, 0, 5, 0, tzinfo=UTC).timestamp()
        noon = dt.datetime(2024, 1, 1, 12, 0, 9, tzinfo=UTC).timestamp()
        self.assertEqual(format_local_time(midnight, UTC), "12:05:00 AM")
        self.assertEqual(format_local_time(noon, UTC), "12:00:09 PM")

    def test_respects_timezone(self):
        self.assertEqual(format_local_time(SUNRISE, ZoneInfo("Asia/Tokyo")), "7:13:20 AM")

    def test_out_of_range_values_are_malformed(self):
        for bad in (1e12, float("nan"), -float("inf")):
            for tz in (UTC, None):
                with self.subTest(value=bad, tz=tz), self.assertRaises(MalformedResponse):
                    format_local_time(bad, tz)

    def test_server_local_time_when_no_timezone(self):
        expected = dt.datetime.fromtimestamp(SUNRISE)
        rendered = format_local_time(SUNRISE)
        self.assertTrue(rendered.endswith(f"{expected:%M:%S} {'AM' if expected.hour < 12 else 'PM'}"))


class TestBuildWeatherResult(unittest.TestCase):
    def test_maps_all_fields(self):
        payload = make_weather_payload()
        result = build_weather_result(payload, tz=UTC)

        self.assertEqual(result.city, "London")
        self.assertEqual(result.country, "GB")
        self.assertEqual(result.temperature, round_half_up(payload["main"]["temp"]))
        self.assertEqual(result.temperature, 16)
        self.assertEqual(result.feels_like, 15)
        self.assertEqual(result.description, "light rain")
        self.assertEqual(result.icon, "10d")
        self.assertEqual(result.humidity, 81)
        self.assertEqual(result.wind, 4.63)
        self.assertEqual(result.pressure, 1012)
        self.assertEqual(result.sunrise, format_local_time(SUNRISE, UTC))
        self.assertEqual(result.sunset, format_local_time(SUNSET, UTC))
        self.assertEqual(result.coordinates.lat, 51.5085)
        self.assertEqual(result.coordinates.lon, -0.1257)

    def test_missing_field_is_malformed(self):
        for path in (("name",), ("main", "feels_like"), ("sys", "sunset"), ("wind", "speed"), ("coord",)):
            payload = make_weather_payload()
            target = payload
            for key in path[:-1]:
                target = target[key]
            del target[path[-1]]
            with self.subTest(path=path), self.assertRaises(MalformedResponse):
                build_weather_result(payload, tz=UTC)

    def test_empty_weather_list_is_malformed(self):
        payload = make_weather_payload()
        payload["weather"] = []
        with self.assertRaises(MalformedResponse):
            build_weather_result(payload, tz=UTC)

    def test_mistyped_field_is_malformed(self):
        payload = make_weather_payload()
        payload["main"]["temp"] = "warm"
        with self.assertRaises(MalformedResponse):
            build_weather_result(payload, tz=UTC)

    def test_null_block_is_malformed(self):
        payload = make_weather_payload()
        payload["sys"] = None
        with self.assertRaises(MalformedResponse):
            build_weather_result(payload, tz=UTC)

    def test_bad_sun_timestamps_are_malformed(self):
        for field in ("sunrise", "sunset"):
            for bad in (1e12, float("nan"), float("inf")):
                for tz in (UTC, None):
                    payload = make_weather_payload()
                    payload["sys"][field] = bad
                    with self.subTest(field=field, value=bad, tz=tz), self.assertRaises(MalformedResponse):
                        build_weather_result(payload, tz=tz)

    def test_result_is_read_only(self):
        result = build_weather_result(make_weather_payload(), tz=UTC)
        with self.assertRaises(Exception):
            result.temperature = 99


class TestLookupWeather(unittest.TestCase):
    def test_success_populates_weather_only(self):
        fake = FakeSession(response=DummyResp(make_weather_payload()))
        view = lookup_weather("London", _settings(), http_session=fake)

        self.assertIsNone(view.error)
        self.assertEqual(view.weather.city, "London")
        self.assertEqual(fake.calls[0]["params"]["appid"], "test-key")
        self.assertEqual(fake.calls[0]["params"]["units"], "metric")

    def test_passes_configured_url_and_timeout(self):
        fake = FakeSession(response=DummyResp(make_weather_payload()))
        settings = _settings(openweather_base_url="https://proxy.test/weather/", request_timeout_seconds=2.5)
        lookup_weather("London", settings, http_session=fake)

        self.assertEqual(fake.calls[0]["url"], "https://proxy.test/weather")
        self.assertEqual(fake.calls[0]["timeout"], 2.5)

    def test_network_error_gives_generic_error(self):
        fake = FakeSession(exc=requests.exceptions.ConnectionError("down"))
        view = lookup_weather("London", _settings(), http_session=fake)

        self.assertIsNone(view.weather)
        self.assertEqual(view.error, GENERIC_ERROR_MESSAGE)

    def test_http_404_gives_generic_error(self):
        fake = FakeSession(response=DummyResp({"cod": "404", "message": "city not found"}, status_code=404))
        view = lookup_weather("Atlantis", _settings(), http_session=fake)

        self.assertIsNone(view.weather)
        self.assertEqual(view.error, GENERIC_ERROR_MESSAGE)

    def test_malformed_payload_gives_generic_error(self):
        payload = make_weather_payload()
        del payload["main"]
        fake = FakeSession(response=DummyResp(payload))
        view = lookup_weather("London", _settings(), http_session=fake)

        self.assertIsNone(view.weather)
        self.assertEqual(view.error, GENERIC_ERROR_MESSAGE)

    def test_out_of_range_sun_timestamps_give_generic_error(self):
        cases = (
            ("sunrise", 1e12, "UTC"),
            ("sunrise", float("nan"), None),
            ("sunset", 1e12, None),
            ("sunset", float("nan"), "UTC"),
        )
        for field, bad, timezone in cases:
            payload = make_weather_payload()
            payload["sys"][field] = bad
            fake = FakeSession(response=DummyResp(payload))
            with self.subTest(field=field, value=bad, timezone=timezone):
                view = lookup_weather("London", _settings(display_timezone=timezone), http_session=fake)
                self.assertIsNone(view.weather)
                self.assertEqual(view.error, GENERIC_ERROR_MESSAGE)

    def test_blank_city_gives_generic_error(self):
        fake = FakeSession(response=DummyResp(make_weather_payload()))
        view = lookup_weather("", _settings(), http_session=fake)

        self.assertEqual(view.error, GENERIC_ERROR_MESSAGE)
        self.assertEqual(fake.calls, [])

    def test_failure_is_logged_with_kind(self):
        fake = FakeSession(exc=requests.exceptions.ConnectionError("down"))
        with self.assertLogs("weather_app.weather_service", level="WARNING") as logs:
            lookup_weather("London", _settings(), http_session=fake)
        self.assertIn("network_failure", logs.output[0])

    def test_same_payload_gives_identical_results(self):
        settings = _settings()
        first = lookup_weather("London", settings, http_session=FakeSession(response=DummyResp(make_weather_payload())))
        second = lookup_weather("London", settings, http_session=FakeSession(response=DummyResp(make_weather_payload())))

        self.assertEqual(first, second)
        self.assertEqual(first.weather.model_dump(), second.weather.model_dump())


if __name__ == "__main__":
    unittest.main()
