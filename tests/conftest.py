import pytest

from recommender import algorithms
from recommender.algorithms import Recommender
from recommender.store import InteractionStore


@pytest.fixture
def purchases():
    return [
        (101, "A"),
        (101, "B"),
        (102, "A"),
        (102, "B"),
        (102, "C"),
        (103, "C"),
        (103, "D"),
    ]


@pytest.fixture
def store(purchases):
    return InteractionStore.load(purchases)


@pytest.fixture
def recommender(store):
    return Recommender(store)


@pytest.fixture
def default_recommender(monkeypatch, tmp_path):
    """Module-level recommender built from the demo data, reset around each test."""
    monkeypatch.setenv("RECOMMENDER_DATA_PATH", str(tmp_path / "missing.csv"))
    for key in ("RECOMMENDER_METRIC", "RECOMMENDER_THRESHOLD", "RECOMMENDER_TOP_K", "RECOMMENDER_ON_MALFORMED"):
        monkeypatch.delenv(key, raising=False)
    algorithms.get_recommender.cache_clear()
    yield algorithms.get_recommender()
    algorithms.get_recommender.cache_clear()
