"""
In-memory store of implicit (user, item) purchase facts.

The store is loaded once from a batch of records and may receive live
additions afterwards. Every write builds a fresh profile map and swaps it in
under a lock, so readers always work against a complete snapshot and never
need to lock themselves.
"""

import logging
import math
import threading
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Tuple

from .errors import InvalidArgumentError, MalformedRecordError

LOGGER = logging.getLogger(__name__)

UserID = Hashable
ItemID = Hashable

ON_MALFORMED_POLICIES = ("raise", "skip")

_EMPTY: FrozenSet[Any] = frozenset()


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    # pandas hands us NaN for empty CSV cells
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def parse_record(record: Any, position: Optional[int] = None) -> Tuple[UserID, ItemID]:
    """
    Read one record as a (user_id, item_id) pair.

    Accepts mappings with "user_id"/"item_id" keys (extra keys such as a
    rating are ignored) or sequences whose first two fields are the ids.
    """
    if isinstance(record, Mapping):
        user_id = record.get("user_id")
        item_id = record.get("item_id")
    elif isinstance(record, (str, bytes)):
        raise MalformedRecordError(
            f"Record {position} is a bare string, expected (user_id, item_id)",
            record=record, position=position,
        )
    else:
        try:
            fields = tuple(record)
        except TypeError:
            raise MalformedRecordError(
                f"Record {position} is not a sequence or mapping: {record!r}",
                record=record, position=position,
            ) from None
        if len(fields) < 2:
            raise MalformedRecordError(
                f"Record {position} has {len(fields)} field(s), expected 2",
                record=record, position=position,
            )
        user_id, item_id = fields[0], fields[1]

    if _is_missing(user_id) or _is_missing(item_id):
        raise MalformedRecordError(
            f"Record {position} is missing user_id or item_id: {record!r}",
            record=record, position=position,
        )

    try:
        hash(user_id)
        hash(item_id)
    except TypeError:
        raise MalformedRecordError(
            f"Record {position} has unhashable ids: {record!r}",
            record=record, position=position,
        ) from None

    return user_id, item_id


def detach_record(record: Any) -> Any:
    """
    Copy a record that may live on the other end of an RPyC connection.

    Mappings become (user_id, item_id) pairs with None for missing keys,
    other iterables become tuples. Strings and non-iterables pass through
    untouched, so parse_record and the store's policy judge them as usual.
    """
    if isinstance(record, (str, bytes)):
        return record
    if hasattr(record, "keys"):
        return record.get("user_id"), record.get("item_id")
    try:
        return tuple(record)
    except TypeError:
        return record


class InteractionStore:
    """Holds who owns what. Reads are lock-free; writes are serialized."""

    def __init__(self, on_malformed: str = "raise") -> None:
        if on_malformed not in ON_MALFORMED_POLICIES:
            raise InvalidArgumentError(
                f"on_malformed must be one of {ON_MALFORMED_POLICIES}, got {on_malformed!r}"
            )
        self.on_malformed = on_malformed
        self._write_lock = threading.Lock()
        self._profiles: Mapping[UserID, FrozenSet[ItemID]] = MappingProxyType({})
        self._size = 0
        self._version = 0
        self.skipped = 0

    @classmethod
    def load(cls, records: Iterable[Any], on_malformed: str = "raise") -> "InteractionStore":
        """Build a store from a batch of records."""
        store = cls(on_malformed=on_malformed)
        added = store.add(records)
        LOGGER.info(
            "Loaded %d interactions for %d users (%d records skipped)",
            added, len(store._profiles), store.skipped,
        )
        return store

    def _parse_all(self, records: Iterable[Any]) -> Tuple[List[Tuple[UserID, ItemID]], int]:
        pairs: List[Tuple[UserID, ItemID]] = []
        skipped = 0
        for position, record in enumerate(records):
            try:
                pairs.append(parse_record(record, position))
            except MalformedRecordError as exc:
                if self.on_malformed == "raise":
                    raise
                skipped += 1
                LOGGER.debug("Skipping malformed record: %s", exc)
        if skipped:
            LOGGER.warning("Skipped %d malformed record(s)", skipped)
        return pairs, skipped

    def add(self, records: Iterable[Any]) -> int:
        """
        Ingest records and publish a new snapshot.

        Returns the number of ownership facts that were not already known.
        With the "raise" policy a malformed record aborts the whole batch and
        nothing is published.
        """
        with self._write_lock:
            pairs, skipped = self._parse_all(records)

            new_items: Dict[UserID, set] = {}
            for user_id, item_id in pairs:
                if item_id in self._profiles.get(user_id, _EMPTY):
                    continue
                new_items.setdefault(user_id, set()).add(item_id)

            self.skipped += skipped
            if not new_items:
                return 0

            profiles = dict(self._profiles)
            added = 0
            for user_id, items in new_items.items():
                profiles[user_id] = profiles.get(user_id, _EMPTY) | items
                added += len(items)

            self._profiles = MappingProxyType(profiles)
            self._size += added
            self._version += 1
            return added

    def snapshot(self) -> Mapping[UserID, FrozenSet[ItemID]]:
        """Current read-only user -> items map. Never changes after return."""
        return self._profiles

    @property
    def version(self) -> int:
        return self._version

    def items_of(self, user_id: UserID) -> FrozenSet[ItemID]:
        return self._profiles.get(user_id, _EMPTY)

    def all_users(self) -> FrozenSet[UserID]:
        return frozenset(self._profiles)

    def all_items(self) -> FrozenSet[ItemID]:
        items: FrozenSet[ItemID] = frozenset()
        return items.union(*self._profiles.values())

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"InteractionStore(users={len(self._profiles)}, interactions={self._size})"
