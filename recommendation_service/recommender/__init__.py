"""
Recommender package.

This package contains:
- interaction loading and the in-memory interaction store
- user-based collaborative filtering over implicit purchase data
- set similarity metrics (Tanimoto, Jaccard, cosine)

The main user-facing functions are:
    get_recommendations_for_user(user_id, top_n)
    get_similar_items(item_id, top_n)
    ingest_interactions(records)
"""

from .algorithms import (
    Recommender,
    get_recommendations_for_user,
    get_recommender,
    get_similar_items,
    ingest_interactions,
)
from .config import Settings
from .data_loader import load_interactions
from .errors import InvalidArgumentError, MalformedRecordError, RecommenderError
from .neighborhood import NeighborhoodSelector
from .profiles import UserProfileIndex
from .scoring import RecommendationScorer, top_n
from .similarity import (
    CosineSimilarity,
    JaccardSimilarity,
    SimilarityEngine,
    SimilarityMetric,
    TanimotoSimilarity,
    get_metric,
)
from .store import InteractionStore

__all__ = [
    "CosineSimilarity",
    "InteractionStore",
    "InvalidArgumentError",
    "JaccardSimilarity",
    "MalformedRecordError",
    "NeighborhoodSelector",
    "RecommendationScorer",
    "Recommender",
    "RecommenderError",
    "Settings",
    "SimilarityEngine",
    "SimilarityMetric",
    "TanimotoSimilarity",
    "UserProfileIndex",
    "get_metric",
    "get_recommendations_for_user",
    "get_recommender",
    "get_similar_items",
    "ingest_interactions",
    "load_interactions",
    "top_n",
]
