import itertools
import math
import random

import pytest

from recommender.errors import InvalidArgumentError
from recommender.profiles import UserProfileIndex
from recommender.similarity import (
    CosineSimilarity,
    JaccardSimilarity,
    SimilarityEngine,
    TanimotoSimilarity,
    get_metric,
)
from recommender.store import InteractionStore


@pytest.fixture
def engine(store):
    return SimilarityEngine(UserProfileIndex.from_store(store))


def test_tanimoto_scenario(engine):
    assert engine.similarity(101, 102) == pytest.approx(2 / 3)
    assert engine.similarity(102, 103) == pytest.approx(1 / 4)
    assert engine.similarity(101, 103) == 0.0


def test_self_similarity_is_one(engine):
    for user_id in (101, 102, 103):
        assert engine.similarity(user_id, user_id) == 1.0


def test_empty_profiles_score_zero(engine):
    assert engine.similarity(998, 999) == 0.0
    assert engine.similarity(101, 999) == 0.0


def test_similarities_skip_self_and_strangers(engine):
    assert engine.similarities(101) == {102: pytest.approx(2 / 3)}
    assert engine.similarities(102) == {101: pytest.approx(2 / 3), 103: pytest.approx(1 / 4)}
    assert engine.similarities(999) == {}


def test_cosine_metric(store):
    engine = SimilarityEngine(UserProfileIndex.from_store(store), "cosine")
    assert engine.similarity(101, 102) == pytest.approx(2 / math.sqrt(6))
    assert engine.similarity(102, 102) == 1.0


def test_jaccard_matches_tanimoto():
    a, b = frozenset("abcd"), frozenset("cdef")
    assert JaccardSimilarity().between(a, b) == TanimotoSimilarity().between(a, b) == pytest.approx(2 / 6)


def test_get_metric():
    assert isinstance(get_metric("tanimoto"), TanimotoSimilarity)
    assert isinstance(get_metric("COSINE"), CosineSimilarity)
    metric = JaccardSimilarity()
    assert get_metric(metric) is metric
    with pytest.raises(InvalidArgumentError):
        get_metric("pearson")


def _random_index(seed=7, users=40, items=25):
    rng = random.Random(seed)
    records = [
        (user_id, f"item-{rng.randrange(items)}")
        for user_id in range(users)
        for _ in range(rng.randrange(0, 8))
    ]
    return UserProfileIndex.from_store(InteractionStore.load(records))


@pytest.mark.parametrize("metric", ["tanimoto", "cosine"])
def test_similarities_match_all_pairs_scan(metric):
    index = _random_index()
    engine = SimilarityEngine(index, metric)
    for target in range(45):
        naive = {}
        for other in index.users:
            if other == target:
                continue
            score = engine.similarity(target, other)
            if score > 0:
                naive[other] = score
        assert engine.similarities(target) == naive


def test_symmetry_and_range():
    index = _random_index(seed=11)
    engine = SimilarityEngine(index)
    for u, v in itertools.combinations(sorted(index.users), 2):
        score = engine.similarity(u, v)
        assert 0.0 <= score <= 1.0
        assert score == engine.similarity(v, u)
