
import math
from typing import AbstractSet, Iterable, Optional
from topn_mrr.context import ItemId

def find_rank(recommendations: Iterable[ItemId], good: AbstractSet[ItemId]) -> Optional[int]:
    """
    ランキング中で最初にgoodに含まれるアイテムの順位(1始まり)を返す。
    見つからない場合（リストが空、goodが空の場合も含む）はNoneを返す。
    最初のヒットで走査を打ち切る。
    """
    if not good:
        return None

    for rank, item_id in enumerate(recommendations, start=1):
        if item_id in good:
            return rank

    return None

def reciprocal_rank(rank: Optional[int]) -> float:
    if rank is None:
        return 0.0
    if rank < 1:
        raise ValueError(f"rank must be >= 1, got {rank}")
    return 1.0 / rank

class MeanAccumulator:
    """
    Running sum and count. The mean of zero values is NaN so that an empty
    evaluation is never reported as a real score.
    """
    def __init__(self):
        self.total = 0.0
        self.count = 0

    def add(self, value: float):
        self.total += value
        self.count += 1

    @property
    def mean(self) -> float:
        if self.count == 0:
            return math.nan
        return self.total / self.count

class DualMeanAccumulator:
    """
    全ユーザーの平均と、good itemがヒットしたユーザーのみの平均を同時に集計する。
    スレッドセーフではないため、並列化する場合は呼び出し側で add_user を排他すること。
    """
    def __init__(self):
        self._all = MeanAccumulator()
        self._good = MeanAccumulator()

    def add_user(self, value: float, had_good: bool):
        self._all.add(value)
        if had_good:
            self._good.add(value)

    def all_mean(self) -> float:
        return self._all.mean

    def good_mean(self) -> float:
        return self._good.mean

    @property
    def user_count(self) -> int:
        return self._all.count

    @property
    def good_count(self) -> int:
        return self._good.count
