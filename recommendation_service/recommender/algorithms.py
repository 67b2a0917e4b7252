"""
User-based collaborative filtering over implicit purchase data.

A recommendation request runs the whole pipeline against the store's current
snapshot:

    profiles -> similarities -> neighborhood -> item scores -> top N

Nothing is shared between requests except the profile index, which is cached
per store snapshot and rebuilt when new interactions arrive.
"""

import logging
import threading
from functools import lru_cache
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from .config import Settings
from .data_loader import load_interactions
from .neighborhood import NeighborhoodSelector, validate_threshold
from .profiles import UserProfileIndex
from .scoring import RecommendationScorer, top_n, validate_n
from .similarity import SimilarityEngine, get_metric
from .store import InteractionStore, ItemID, UserID

LOGGER = logging.getLogger(__name__)


class Recommender:
    """Top-N recommendations for one user from the purchases of similar users."""

    def __init__(
        self,
        store: InteractionStore,
        metric="tanimoto",
        threshold: float = 0.0,
        top_k: Optional[int] = None,
    ) -> None:
        self.store = store
        self.metric = get_metric(metric)
        self.threshold = validate_threshold(threshold)
        self.top_k = validate_n(top_k, "top_k") if top_k is not None else None

        self._index_lock = threading.Lock()
        self._indexed_snapshot: Any = None
        self._index: Optional[UserProfileIndex] = None

    @classmethod
    def from_settings(cls, store: InteractionStore, settings: Settings) -> "Recommender":
        return cls(store, metric=settings.metric, threshold=settings.threshold, top_k=settings.top_k)

    @property
    def index(self) -> UserProfileIndex:
        """Profile index for the store's current snapshot."""
        snapshot = self.store.snapshot()
        with self._index_lock:
            if self._indexed_snapshot is not snapshot:
                self._index = UserProfileIndex(snapshot)
                self._indexed_snapshot = snapshot
                LOGGER.debug("Rebuilt profile index for %d users", len(self._index))
            return self._index

    def profile_of(self, user_id: UserID) -> FrozenSet[ItemID]:
        return self.index.profile_of(user_id)

    def similarity(self, user_a: UserID, user_b: UserID) -> float:
        return SimilarityEngine(self.index, self.metric).similarity(user_a, user_b)

    def _neighbors(self, index: UserProfileIndex, user_id: UserID) -> List[Tuple[UserID, float]]:
        selector = NeighborhoodSelector(SimilarityEngine(index, self.metric))
        return selector.neighbors(user_id, threshold=self.threshold, top_k=self.top_k)

    def neighbors(self, user_id: UserID) -> List[Tuple[UserID, float]]:
        return self._neighbors(self.index, user_id)

    def recommend(self, user_id: UserID, n: int) -> List[Tuple[ItemID, float]]:
        """
        Best `n` items the user doesn't own yet, as (item_id, score) pairs.

        Unknown users and users without neighbors get an empty list.
        """
        validate_n(n)
        # one index for the whole request, even if a write lands meanwhile
        index = self.index
        neighborhood = self._neighbors(index, user_id)
        scores = RecommendationScorer(index).score(user_id, neighborhood)
        return top_n(scores, n)

    def similar_items(self, item_id: ItemID, n: int) -> List[Tuple[ItemID, float]]:
        """Items most often bought by the same users, scored with the same metric."""
        validate_n(n)
        index = self.index
        owners = index.users_of(item_id)
        if not owners:
            return []

        co_owned: Dict[ItemID, int] = {}
        for user_id in owners:
            for other in index.profile_of(user_id):
                if other != item_id:
                    co_owned[other] = co_owned.get(other, 0) + 1

        scores = {
            other: self.metric.from_counts(common, len(owners), len(index.users_of(other)))
            for other, common in co_owned.items()
        }
        return top_n(scores, n)


# ---------------------------------------------------------------------------
# Module-level API used by the RPyC service
# ---------------------------------------------------------------------------

@lru_cache(maxsize=None)
def get_recommender() -> Recommender:
    """Build (and cache) the default recommender from settings and the data file."""
    settings = Settings.from_env()
    store = InteractionStore.load(
        load_interactions(settings.data_path),
        on_malformed=settings.on_malformed,
    )
    return Recommender.from_settings(store, settings)


def _as_dicts(pairs: Iterable[Tuple[ItemID, float]]) -> List[Dict[str, Any]]:
    return [{"item_id": item_id, "score": score} for item_id, score in pairs]


def get_recommendations_for_user(user_id: UserID, top_n: int = 10) -> List[Dict[str, Any]]:
    """
    Returns a list of item dicts:
    [{ "item_id": "C", "score": 0.67 }, ...]
    """
    return _as_dicts(get_recommender().recommend(user_id, top_n))


def get_similar_items(item_id: ItemID, top_n: int = 10) -> List[Dict[str, Any]]:
    """
    Returns items that are bought by the same users as the given item.
    """
    return _as_dicts(get_recommender().similar_items(item_id, top_n))


def ingest_interactions(records: Iterable[Any]) -> int:
    """Add interactions to the default recommender's store; returns the number added."""
    added = get_recommender().store.add(records)
    LOGGER.info("Ingested %d new interaction(s)", added)
    return added
