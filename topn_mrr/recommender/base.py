
from typing import List, Protocol
from topn_mrr.context import ItemId

class Recommender(Protocol):
    def recommend(self, user_id: int, n: int) -> List[ItemId]:
        """
        ユーザーIDを受け取り、上位n件のアイテムIDを順位順に返す
        """
        ...
