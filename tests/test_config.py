import logging
from pathlib import Path

import pytest

from recommender.config import DEFAULT_PORT, INTERACTIONS_CSV, Settings
from recommender.errors import InvalidArgumentError


def test_defaults():
    settings = Settings.from_env({})
    assert settings.data_path == INTERACTIONS_CSV
    assert settings.metric == "tanimoto"
    assert settings.threshold == 0.0
    assert settings.top_k is None
    assert settings.on_malformed == "raise"
    assert settings.port == DEFAULT_PORT


def test_reads_environment():
    settings = Settings.from_env({
        "RECOMMENDER_DATA_PATH": "/data/purchases.csv",
        "RECOMMENDER_METRIC": "cosine",
        "RECOMMENDER_THRESHOLD": "0.25",
        "RECOMMENDER_TOP_K": "20",
        "RECOMMENDER_ON_MALFORMED": "skip",
        "RPYC_HOST": "0.0.0.0",
        "RPYC_PORT": "19000",
    })
    assert settings.data_path == Path("/data/purchases.csv")
    assert settings.metric == "cosine"
    assert settings.threshold == 0.25
    assert settings.top_k == 20
    assert settings.on_malformed == "skip"
    assert settings.host == "0.0.0.0"
    assert settings.port == 19000


@pytest.mark.parametrize("key,value", [
    ("RECOMMENDER_THRESHOLD", "lots"),
    ("RECOMMENDER_TOP_K", "2.5"),
    ("RPYC_PORT", "http"),
])
def test_bad_numbers_raise(key, value):
    with pytest.raises(InvalidArgumentError):
        Settings.from_env({key: value})


def test_configure_logging_adds_one_stdout_handler(monkeypatch):
    from recommender.logger import configure_logging

    monkeypatch.setenv("LOG_LEVEL", "debug")
    names = ("recommender.tests.logging",)
    configure_logging(names=names)
    configure_logging(names=names)

    logger = logging.getLogger(names[0])
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG

    configure_logging("warning", names=names)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
