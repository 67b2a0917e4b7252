from typing import Any, Dict, Hashable, Iterable, List, Mapping, Sequence, Tuple

from .errors import InvalidArgumentError
from .profiles import UserProfileIndex
from .store import ItemID, UserID


def id_sort_key(value: Any) -> Tuple[bool, Any]:
    # ints before strings so mixed id types still sort
    return isinstance(value, str), value


def rank(scores: Iterable[Tuple[Hashable, float]]) -> List[Tuple[Hashable, float]]:
    """Order (id, score) pairs by score descending, then id ascending."""
    return sorted(scores, key=lambda pair: (-pair[1], id_sort_key(pair[0])))


def validate_n(n: Any, name: str = "n") -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(f"{name} must be a positive integer, got {n!r}")
    if n <= 0:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {n}")
    return n


def top_n(scores: Mapping[ItemID, float], n: int) -> List[Tuple[ItemID, float]]:
    """Best `n` items with a positive score. Fewer are returned if fewer qualify."""
    validate_n(n)
    return rank((item_id, score) for item_id, score in scores.items() if score > 0)[:n]


class RecommendationScorer:
    """Turns a neighborhood into per-item scores for the target user."""

    def __init__(self, index: UserProfileIndex) -> None:
        self.index = index

    def score(self, target: UserID, neighborhood: Sequence[Tuple[UserID, float]]) -> Dict[ItemID, float]:
        owned = self.index.profile_of(target)
        scores: Dict[ItemID, float] = {}
        for neighbor, similarity in neighborhood:
            for item_id in self.index.profile_of(neighbor) - owned:
                scores[item_id] = scores.get(item_id, 0.0) + similarity
        return scores
