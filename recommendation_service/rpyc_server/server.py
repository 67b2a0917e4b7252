import logging
from typing import Optional

import rpyc
from rpyc.utils.server import ThreadedServer

from recommender.algorithms import Recommender, get_recommender
from recommender.config import Settings
from recommender.logger import configure_logging
from recommender.store import detach_record

LOGGER = logging.getLogger(__name__)


class RecommendationService(rpyc.Service):
    """
    RPyC service exposing the recommender functions.
    Methods must be exposed_* to be callable remotely.

    Results are returned as tuples of (item_id, score) so RPyC passes them
    by value instead of as netrefs.
    """

    def __init__(self, recommender: Optional[Recommender] = None) -> None:
        super().__init__()
        self._recommender = recommender

    @property
    def recommender(self) -> Recommender:
        if self._recommender is None:
            self._recommender = get_recommender()
        return self._recommender

    def exposed_get_recommendations_for_user(self, user_id, top_n: int = 10):
        return tuple(self.recommender.recommend(user_id, top_n))

    def exposed_get_similar_items(self, item_id, top_n: int = 10):
        return tuple(self.recommender.similar_items(item_id, top_n))

    def exposed_load_interactions(self, interactions) -> int:
        records = [detach_record(record) for record in interactions]
        added = self.recommender.store.add(records)
        LOGGER.info("Ingested %d new interaction(s) from %d record(s)", added, len(records))
        return added


def run_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    settings = Settings.from_env()
    host = host or settings.host
    port = port or settings.port

    configure_logging()
    service = RecommendationService(get_recommender())
    server = ThreadedServer(service, hostname=host, port=port)
    LOGGER.info("RPyC RecommendationService listening on %s:%s", host, port)
    server.start()


if __name__ == "__main__":
    run_server()
