
import uuid
import concurrent.futures
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterable, List, Optional
from topn_mrr.context import ItemId, TestUser
from topn_mrr.metrics.mrr import MRRContext, TopNMRRMetric, UserResult
from topn_mrr.observability.logging import log_aggregate_result
from topn_mrr.recommender.base import Recommender

@dataclass
class EvaluationResult:
    run_id: str
    user_rows: Dict[int, Dict[str, Optional[float]]] = field(default_factory=dict)
    aggregate_row: Dict[str, float] = field(default_factory=dict)

def _measure(metric: TopNMRRMetric, context: MRRContext, recommender: Recommender,
             user: TestUser, n: int) -> UserResult:
    recommendations = list(recommender.recommend(user.user_id, n))[:n]
    return metric.measure_user(user, n, recommendations, context)

def evaluate(metric: TopNMRRMetric, users: Iterable[TestUser], universe: AbstractSet[ItemId],
             recommender: Recommender, n: int = 10, parallel: bool = False,
             max_workers: Optional[int] = None) -> EvaluationResult:
    """
    1つのアルゴリズムを1つのデータセットで評価する。

    Args:
        metric: measures each user and owns the column naming.
        users: test users, evaluated in the given order.
        universe: every known item id.
        recommender: produces the top-n list for each user.
        n: list length requested from the recommender.
        parallel: measure users on a thread pool.

    Returns:
        EvaluationResult: per-user rows keyed by user id, plus the aggregate row.

    Raises:
        ValueError: if a user id appears more than once.
    """
    users = list(users)
    seen = set()
    for user in users:
        if user.user_id in seen:
            raise ValueError(f"duplicate test user: {user.user_id}")
        seen.add(user.user_id)
    context = metric.create_context(universe, recommender)

    if parallel:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(_measure, metric, context, recommender, user, n) for user in users]
            results: List[UserResult] = [future.result() for future in futures]
    else:
        results = [_measure(metric, context, recommender, user, n) for user in users]

    aggregate = metric.get_aggregate_measurements(context)
    run_id = str(uuid.uuid4())
    log_aggregate_result(run_id, context.user_count, aggregate.mrr, aggregate.mrr_of_good)

    return EvaluationResult(
        run_id=run_id,
        user_rows={user.user_id: metric.user_row(result) for user, result in zip(users, results)},
        aggregate_row=metric.aggregate_row(aggregate)
    )
