"""
Test configuration and shared fixtures for JuanMap tests
"""

import os

import pytest

from src.api.cache.cache_provider import MemoryCacheProvider


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Setup test environment variables"""
    test_env = {
        "GOOGLE_API_KEY": "test-key-for-testing",
        "CACHE_BACKEND": "memory",
        "API_HOST": "127.0.0.1",
        "API_PORT": "3000",
        "LOG_LEVEL": "WARNING",
    }
    for key, value in test_env.items():
        os.environ[key] = value
    yield


def polygon_geojson(south, north, west, east):
    """Axis-aligned square polygon with [lng, lat] pairs, as Nominatim returns them"""
    return {
        "type": "Polygon",
        "coordinates": [
            [[west, south], [east, south], [east, north], [west, north], [west, south]]
        ],
    }


def make_candidate(name, bbox, geojson=None):
    south, north, west, east = bbox
    return {
        "name": name,
        "display_name": f"{name}, Metro Manila, Philippines",
        "boundingbox": [str(south), str(north), str(west), str(east)],
        "geojson": geojson or polygon_geojson(south, north, west, east),
    }


class StubGeocoder:
    """Records queries and returns a fixed candidate list"""

    def __init__(self, candidates):
        self.candidates = candidates
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        return list(self.candidates)


@pytest.fixture
def memory_cache():
    return MemoryCacheProvider(expiry_seconds=60)


@pytest.fixture
def san_juan():
    return make_candidate("San Juan", (14.59, 14.61, 121.02, 121.05))


@pytest.fixture
def san_juan_batangas():
    return make_candidate("San Juan", (13.75, 13.85, 121.35, 121.45))
