
import pytest
from typing import List, Dict, Any
from topn_mrr.recommender.adapter import LambdaRecommenderAdapter

# Mock existing logic function
def mock_logic_func(context: Dict[str, Any]) -> List[Dict[str, Any]]:
    # The existing logic receives a dict and returns a list of dicts
    return [
        {'id': 11, 'score': 0.9, 'meta_data': 'foo'},
        {'id': '12', 'score': 0.8},
        {'id': 13, 'score': 0.1},
    ]

def test_adapter_converts_result_to_ids():
    adapter = LambdaRecommenderAdapter(logic_func=mock_logic_func)

    assert adapter.recommend(user_id=1, n=5) == [11, 12, 13]

def test_adapter_recommend_truncates_to_n():
    adapter = LambdaRecommenderAdapter(logic_func=mock_logic_func)
    assert adapter.recommend(user_id=1, n=2) == [11, 12]

def test_adapter_passes_user_and_length():
    received = {}

    def logic(ctx):
        received.update(ctx)
        return []

    adapter = LambdaRecommenderAdapter(logic)
    assert adapter.recommend(user_id=7, n=3) == []
    assert received == {'user_id': 7, 'n': 3}
