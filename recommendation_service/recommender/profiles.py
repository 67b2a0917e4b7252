from typing import Dict, FrozenSet, Mapping

from .store import InteractionStore, ItemID, UserID

_EMPTY: FrozenSet = frozenset()


class UserProfileIndex:
    """
    Read-only view of who owns what, in both directions.

    profile_of(user) -> items the user owns
    users_of(item)   -> users who own the item

    Unknown ids map to an empty set.
    """

    def __init__(self, profiles: Mapping[UserID, FrozenSet[ItemID]]) -> None:
        self._profiles: Dict[UserID, FrozenSet[ItemID]] = {
            user_id: frozenset(items) for user_id, items in profiles.items()
        }

        owners: Dict[ItemID, set] = {}
        for user_id, items in self._profiles.items():
            for item_id in items:
                owners.setdefault(item_id, set()).add(user_id)
        self._owners: Dict[ItemID, FrozenSet[UserID]] = {
            item_id: frozenset(users) for item_id, users in owners.items()
        }

    @classmethod
    def from_store(cls, store: InteractionStore) -> "UserProfileIndex":
        return cls(store.snapshot())

    def profile_of(self, user_id: UserID) -> FrozenSet[ItemID]:
        return self._profiles.get(user_id, _EMPTY)

    def users_of(self, item_id: ItemID) -> FrozenSet[UserID]:
        return self._owners.get(item_id, _EMPTY)

    @property
    def users(self) -> FrozenSet[UserID]:
        return frozenset(self._profiles)

    @property
    def items(self) -> FrozenSet[ItemID]:
        return frozenset(self._owners)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)
