
import threading
from dataclasses import dataclass
from typing import AbstractSet, Callable, Dict, Optional, Sequence
from topn_mrr.config import MetricConfig
from topn_mrr.context import ItemId, TestUser
from topn_mrr.metrics.rank import DualMeanAccumulator, find_rank, reciprocal_rank
from topn_mrr.observability.logging import log_no_good_items
from topn_mrr.recommender.base import Recommender
from topn_mrr.selection.api import UserTestItems, compile_selector
from topn_mrr.selection.base import ItemSelector

RANK_COLUMN = "Rank"
RECIP_RANK_COLUMN = "RecipRank"
MRR_COLUMN = "MRR"
MRR_OF_GOOD_COLUMN = "MRR.OfGood"

@dataclass(frozen=True)
class UserResult:
    rank: Optional[int]

    @property
    def recip_rank(self) -> float:
        return reciprocal_rank(self.rank)

@dataclass(frozen=True)
class AggregateResult:
    # 全ユーザーのMRR。good itemが無いユーザーは0として含まれる
    mrr: float
    # good itemを推薦できたユーザーのみのMRR
    mrr_of_good: float

class MRRContext:
    """
    1つの (アルゴリズム, データセット) の評価に対応する状態。
    アキュムレータはこのコンテキストだけが更新する。
    """
    def __init__(self, universe: AbstractSet[ItemId], recommender: Recommender):
        self.universe = universe
        self.recommender = recommender
        self._accumulator = DualMeanAccumulator()
        self._lock = threading.Lock()

    def add_user(self, result: UserResult):
        with self._lock:
            self._accumulator.add_user(result.recip_rank, result.rank is not None)

    @property
    def user_count(self) -> int:
        return self._accumulator.user_count

    def snapshot(self) -> AggregateResult:
        with self._lock:
            return AggregateResult(
                mrr=self._accumulator.all_mean(),
                mrr_of_good=self._accumulator.good_mean()
            )

class TopNMRRMetric:
    """
    Mean reciprocal rank over top-N recommendation lists.

    Args:
        good_items: selector for the items counted as hits. Defaults to the
            user's held-out test items.
        suffix: appended to every column name as ``<column>.<suffix>``.
        diagnostics: called with the user id when a user has no good items.
            Defaults to a warning on the ``evaluation`` logger.
    """
    def __init__(self, good_items: Optional[ItemSelector] = None, suffix: Optional[str] = None,
                 diagnostics: Optional[Callable[[int], None]] = None):
        self.good_items = good_items if good_items is not None else UserTestItems()
        self.suffix = suffix
        self.diagnostics = diagnostics if diagnostics is not None else log_no_good_items

    @classmethod
    def from_config(cls, config: MetricConfig,
                    diagnostics: Optional[Callable[[int], None]] = None) -> "TopNMRRMetric":
        return cls(compile_selector(config.good_items), config.suffix, diagnostics)

    def create_context(self, universe: AbstractSet[ItemId], recommender: Recommender) -> MRRContext:
        return MRRContext(universe, recommender)

    def measure_user(self, user: TestUser, target_length: int, recommendations: Sequence[ItemId],
                     context: MRRContext) -> UserResult:
        # target_length は参照しない（ランキングは呼び出し側で切り詰め済み）
        good = self.good_items.select_items(context.universe, context.recommender, user)
        if not good:
            self.diagnostics(user.user_id)

        result = UserResult(find_rank(recommendations, good))
        context.add_user(result)
        return result

    def get_aggregate_measurements(self, context: MRRContext) -> AggregateResult:
        return context.snapshot()

    def user_row(self, result: UserResult) -> Dict[str, Optional[float]]:
        return {
            self._column(RANK_COLUMN): result.rank,
            self._column(RECIP_RANK_COLUMN): result.recip_rank,
        }

    def aggregate_row(self, result: AggregateResult) -> Dict[str, float]:
        return {
            self._column(MRR_COLUMN): result.mrr,
            self._column(MRR_OF_GOOD_COLUMN): result.mrr_of_good,
        }

    def _column(self, name: str) -> str:
        if self.suffix:
            return f"{name}.{self.suffix}"
        return name
