"""Cache of generated insights, one entry per reporting-range label."""

import logging

from helpdesk.domains.insights.models import Recommendation
from helpdesk.utils.store import KeyValueStore

logger = logging.getLogger(__name__)

INSIGHTS_KEY = "helpdesk_insights_cache"


class InsightCache:
    """Insight payloads keyed by range label inside one store entry.

    Entries survive small data changes; only ``clear()`` (called when the
    ticket collection is replaced or reset) drops them.
    """

    def __init__(self, store: KeyValueStore, key: str = INSIGHTS_KEY):
        self.store = store
        self.key = key

    def _entries(self) -> dict:
        entries = self.store.get(self.key)
        return entries if isinstance(entries, dict) else {}

    def get(self, label: str) -> Recommendation | None:
        payload = self._entries().get(label)
        if payload is None:
            return None
        logger.debug("Insight cache hit for %s", label)
        return Recommendation.from_payload(payload)

    def put(self, label: str, recommendation: Recommendation) -> None:
        entries = self._entries()
        entries[label] = recommendation.to_payload()
        self.store.set(self.key, entries)

    def clear(self) -> None:
        self.store.delete(self.key)
        logger.info("Insight cache cleared")
