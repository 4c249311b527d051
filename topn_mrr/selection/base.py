
from typing import AbstractSet, Protocol
from topn_mrr.context import ItemId, TestUser
from topn_mrr.recommender.base import Recommender

class ItemSelector(Protocol):
    def select_items(self, universe: AbstractSet[ItemId], recommender: Recommender,
                     user: TestUser) -> AbstractSet[ItemId]:
        """
        ユーザーごとの「good item」集合を返す
        """
        ...
