"""
=============================================================================
WEATHER HANDLER
=============================================================================

    weather?city=Paris&unit=c   → "The current temperature in Paris is 20.0°C."

=============================================================================
FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │  unit == "f" ?  ── yes ──► units = "imperial", symbol = "°F"        │
    │       │                                                              │
    │       no ─────────────► units = "metric",   symbol = "°C"           │
    │                                                                      │
    │  key = "paris_metric"                                                │
    │       │                                                              │
    │       ▼                                                              │
    │  ResponseCache.get_or_refresh(key, loader)                           │
    │       │                                                              │
    │       ├── fresh entry (< 10 min) ──► cached payload                  │
    │       │                                                              │
    │       └── otherwise loader():                                        │
    │              no API key → MOCK_PAYLOAD  {"main": {"temp": 20}}       │
    │              API key    → GET openweathermap ?q=&appid=&units=       │
    │                                                                      │
    │  payload ──► json ──► main.temp ──► "...is 20.0°C."                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The mock payload is cached exactly like a live one, so both modes behave
the same with respect to freshness.

The API key is resolved once at startup (ServerConfig.weather_api_key)
and handed to the constructor; it is never read per request.

=============================================================================
"""

from typing import Optional
import json
import logging

from ..cache import ResponseCache, weather_cache_key
from ..fetch import DEFAULT_TIMEOUT
from ..http.query import QueryDecodeError, encode_query, params_after
from ..http.response import HTTPResponse, ok_text, bad_request, internal_error


logger = logging.getLogger(__name__)

OPENWEATHER_API = "http://api.openweathermap.org/data/2.5/weather"
MOCK_PAYLOAD = json.dumps({"main": {"temp": 20}})


def units_for(unit: str) -> str:
    """OpenWeatherMap units parameter for a c/f unit flag."""
    return "imperial" if unit == "f" else "metric"


def symbol_for(unit: str) -> str:
    return "°F" if unit == "f" else "°C"


def parse_temperature(payload: str) -> float:
    """
    main.temp of an OpenWeatherMap current-weather payload, as a float.

    Raises:
        ValueError: Invalid JSON, or no numeric main.temp.
    """
    data = json.loads(payload)

    main = data.get("main") if isinstance(data, dict) else None
    if not isinstance(main, dict) or "temp" not in main:
        raise ValueError("weather response has no main.temp")

    temp = main["temp"]
    if isinstance(temp, bool):
        raise ValueError(f"main.temp is not a number: {temp!r}")
    try:
        return float(temp)
    except (TypeError, ValueError):
        raise ValueError(f"main.temp is not a number: {temp!r}")


class WeatherHandler:
    """
    Args:
        cache: Shared response cache.
        fetcher: Anything with fetch(url, timeout) -> bytes.
        api_key: OpenWeatherMap key; None or "" switches to mock data.
        base_url: Current-weather endpoint.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        cache: ResponseCache,
        fetcher,
        api_key: Optional[str] = None,
        base_url: str = OPENWEATHER_API,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.api_key = api_key or None
        self.base_url = base_url
        self.timeout = timeout

    @property
    def uses_mock_data(self) -> bool:
        return self.api_key is None

    def build_url(self, city: str, units: str) -> str:
        query = encode_query({"q": city, "appid": self.api_key or "", "units": units})
        return f"{self.base_url}?{query}"

    def load(self, city: str, units: str) -> str:
        """Fresh payload for city/units: mock data or a live fetch."""
        if self.uses_mock_data:
            return MOCK_PAYLOAD
        body = self.fetcher.fetch(self.build_url(city, units), self.timeout)
        return body.decode("utf-8")

    def handle(self, path: str) -> HTTPResponse:
        try:
            params = params_after(path, "weather?")
        except QueryDecodeError as e:
            return bad_request(f"Malformed query string: {e}")

        if "city" not in params or "unit" not in params:
            return bad_request("Missing parameters. Usage: /weather?city=London&unit=c")

        city = params["city"]
        unit = params["unit"].lower()
        units = units_for(unit)
        key = weather_cache_key(city, units)

        try:
            payload = self.cache.get_or_refresh(key, lambda: self.load(city, units))
            temp = parse_temperature(payload)
        except Exception as e:
            logger.warning(f"Weather lookup failed for {key}: {e}")
            return internal_error(f"Unexpected error: {e}")

        return ok_text(f"The current temperature in {city} is {temp}{symbol_for(unit)}.")
