from typing import List, Optional, Tuple

from .errors import InvalidArgumentError
from .scoring import rank, validate_n
from .similarity import SimilarityEngine
from .store import UserID


def validate_threshold(threshold) -> float:
    try:
        value = float(threshold)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"threshold must be a number, got {threshold!r}") from None
    if not 0.0 <= value <= 1.0:
        raise InvalidArgumentError(f"threshold must be within [0, 1], got {value}")
    return value


class NeighborhoodSelector:
    """
    Picks the users most similar to a target.

    threshold: minimum similarity (0.0 keeps every nonzero score)
    top_k:     cap on neighborhood size, applied after the threshold
    """

    def __init__(self, engine: SimilarityEngine) -> None:
        self.engine = engine

    def neighbors(
        self,
        target: UserID,
        threshold: float = 0.0,
        top_k: Optional[int] = None,
    ) -> List[Tuple[UserID, float]]:
        threshold = validate_threshold(threshold)
        if top_k is not None:
            validate_n(top_k, "top_k")

        candidates = [
            (user_id, score)
            for user_id, score in self.engine.similarities(target).items()
            if score > 0 and score >= threshold
        ]
        ranked = rank(candidates)
        if top_k is not None:
            ranked = ranked[:top_k]
        return ranked
