"""
Set-based similarity between users (or items).

Every metric here works on implicit data, i.e. plain sets of owned ids, and
is computed from three counts: the size of the intersection and the sizes of
the two sets. A zero intersection always scores 0, which is what lets
SimilarityEngine skip users who share nothing with the target.
"""

import math
from typing import Dict, FrozenSet, Hashable, Iterable

from .errors import InvalidArgumentError
from .profiles import UserProfileIndex
from .store import UserID


class SimilarityMetric:
    """Common contract for the set similarity metrics."""

    name = "base"

    def from_counts(self, intersection: int, size_a: int, size_b: int) -> float:
        raise NotImplementedError

    def between(self, set_a: FrozenSet[Hashable], set_b: FrozenSet[Hashable]) -> float:
        return self.from_counts(len(set_a & set_b), len(set_a), len(set_b))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class TanimotoSimilarity(SimilarityMetric):
    """|A ∩ B| / |A ∪ B|"""

    name = "tanimoto"

    def from_counts(self, intersection: int, size_a: int, size_b: int) -> float:
        union = size_a + size_b - intersection
        if union <= 0:
            return 0.0
        return intersection / union


class JaccardSimilarity(TanimotoSimilarity):
    """Same coefficient as Tanimoto; the name used for plain sets."""

    name = "jaccard"


class CosineSimilarity(SimilarityMetric):
    """Binary cosine: |A ∩ B| / sqrt(|A| * |B|)"""

    name = "cosine"

    def from_counts(self, intersection: int, size_a: int, size_b: int) -> float:
        if size_a == 0 or size_b == 0:
            return 0.0
        # clamp float noise so the result stays inside [0, 1]
        return min(1.0, intersection / math.sqrt(size_a * size_b))


METRICS = {
    metric.name: metric
    for metric in (TanimotoSimilarity, JaccardSimilarity, CosineSimilarity)
}


def get_metric(name) -> SimilarityMetric:
    """Return a metric instance by name, or pass an instance straight through."""
    if isinstance(name, SimilarityMetric):
        return name
    try:
        return METRICS[str(name).lower()]()
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown similarity metric {name!r}, expected one of {sorted(METRICS)}"
        ) from None


def overlap_counts(index: UserProfileIndex, items: Iterable[Hashable]) -> Dict[UserID, int]:
    """Count, per user, how many of `items` they own. Users with no overlap are absent."""
    counts: Dict[UserID, int] = {}
    for item_id in items:
        for user_id in index.users_of(item_id):
            counts[user_id] = counts.get(user_id, 0) + 1
    return counts


class SimilarityEngine:
    """Scores a target user against the rest of the index."""

    def __init__(self, index: UserProfileIndex, metric="tanimoto") -> None:
        self.index = index
        self.metric = get_metric(metric)

    def similarity(self, target: UserID, other: UserID) -> float:
        return self.metric.between(self.index.profile_of(target), self.index.profile_of(other))

    def similarities(self, target: UserID) -> Dict[UserID, float]:
        """
        Similarity of `target` to every other user sharing at least one item.

        Users with no common item score 0 and are left out; the target itself
        is never included.
        """
        profile = self.index.profile_of(target)
        if not profile:
            return {}

        size_target = len(profile)
        scores: Dict[UserID, float] = {}
        for user_id, common in overlap_counts(self.index, profile).items():
            if user_id == target:
                continue
            score = self.metric.from_counts(common, size_target, len(self.index.profile_of(user_id)))
            if score > 0:
                scores[user_id] = score
        return scores
