# ABOUTME: Shared test fixtures for the weather plugin test suite.
# ABOUTME: Provides canned OpenWeatherMap payloads for both endpoints.

import pytest


@pytest.fixture
def current_payload() -> dict:
    """A /weather response for Huntington, trimmed to realistic fields."""
    return {
        "coord": {"lon": -82.45, "lat": 38.42},
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "base": "stations",
        "main": {
            "temp": 300.0,
            "feels_like": 301.5,
            "temp_min": 298.7,
            "temp_max": 301.2,
            "pressure": 1016,
            "humidity": 48,
        },
        "visibility": 10000,
        "dt": 1700000000,
        "timezone": 0,
        "id": 4809537,
        "name": "Huntington",
        "cod": 200,
    }


@pytest.fixture
def forecast_payload() -> dict:
    """A /forecast response with two 3-hourly readings."""
    return {
        "cod": "200",
        "message": 0,
        "cnt": 2,
        "list": [
            {
                "dt": 1700006400,
                "main": {"temp": 280.0, "feels_like": 278.0, "pressure": 1020, "humidity": 70, "temp_kf": 0.5},
                "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10n"}],
                "dt_txt": "2023-11-15 00:00:00",
            },
            {
                "dt": 1700017200,
                "main": {"temp": 275.0, "feels_like": 272.5, "pressure": 1021, "humidity": 75},
                "weather": [{"id": 804, "main": "Clouds", "description": "overcast clouds", "icon": "04n"}],
                "dt_txt": "2023-11-15 03:00:00",
            },
        ],
        "city": {
            "id": 4809537,
            "name": "Huntington",
            "coord": {"lat": 38.42, "lon": -82.45},
            "country": "US",
            "population": 49138,
            "timezone": -18000,
            "sunrise": 1699964640,
            "sunset": 1700001660,
        },
    }