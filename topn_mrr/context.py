
from dataclasses import dataclass
from typing import FrozenSet

ItemId = int

@dataclass(frozen=True)
class TestUser:
    # pytestにテストクラスとして収集させない
    __test__ = False

    user_id: int
    test_items: FrozenSet[ItemId] = frozenset()
    train_items: FrozenSet[ItemId] = frozenset()
