import rpyc

from recommender.config import DEFAULT_HOST, DEFAULT_PORT
from recommender.store import detach_record


class RecommendationClient:
    """
    Thin RPyC client for the Recommendation Service.
    """

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, conn=None) -> None:
        self.host = host
        self.port = port
        self._conn = conn

    def _get_connection(self):
        if self._conn is None:
            self._conn = rpyc.connect(self.host, self.port)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @staticmethod
    def _to_dicts(pairs):
        return [{"item_id": item_id, "score": score} for item_id, score in pairs]

    def get_recommendations_for_user(self, user_id, top_n: int = 10):
        conn = self._get_connection()
        return self._to_dicts(conn.root.get_recommendations_for_user(user_id, top_n))

    def get_similar_items(self, item_id, top_n: int = 10):
        conn = self._get_connection()
        return self._to_dicts(conn.root.get_similar_items(item_id, top_n))

    def load_interactions(self, interactions) -> int:
        """Push new (user_id, item_id) interactions; dicts or pairs are accepted."""
        # pairs travel by value; malformed records are left for the server to reject
        records = tuple(detach_record(record) for record in interactions)
        conn = self._get_connection()
        return conn.root.load_interactions(records)
