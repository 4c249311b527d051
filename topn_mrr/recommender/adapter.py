
from typing import List, Callable, Dict, Any
from topn_mrr.context import ItemId
from topn_mrr.recommender.base import Recommender

class LambdaRecommenderAdapter(Recommender):
    """
    既存のLambda/関数ベースの推薦ロジックをラップし、
    Recommenderインターフェースに適合させるアダプター
    """
    def __init__(self, logic_func: Callable[[Dict[str, Any]], List[Dict[str, Any]]]):
        self.logic_func = logic_func

    def recommend(self, user_id: int, n: int) -> List[ItemId]:
        # 既存ロジックはdictを受け取り、順位順のdictのリストを返すと仮定
        raw_results = self.logic_func({'user_id': user_id, 'n': n})
        return [int(raw['id']) for raw in raw_results[:n]]
