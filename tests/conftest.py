import os
import pytest


# Keep tests on the in-memory cache with readable logs
os.environ.setdefault("WEATHER_ENV", "local")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.pop("WEATHER_PLANETS_FILE", None)


@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient
    from apps.api.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="session")
def openapi_spec(client):
    r = client.get("/openapi.json")
    r.raise_for_status()
    return r.json()


@pytest.fixture
def reset_planets():
    from forecast.planet_config import reset_planet_config

    reset_planet_config()
    yield
    reset_planet_config()
