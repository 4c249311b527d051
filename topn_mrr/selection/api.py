
import re
from typing import AbstractSet, Callable, Dict, FrozenSet, List, Tuple
from topn_mrr.config import ConfigurationError
from topn_mrr.context import ItemId, TestUser
from topn_mrr.recommender.base import Recommender
from topn_mrr.selection.base import ItemSelector

DEFAULT_SELECTOR = "user.testItems"

class UserTestItems:
    def select_items(self, universe, recommender, user: TestUser) -> FrozenSet[ItemId]:
        return frozenset(user.test_items)

class UserTrainItems:
    def select_items(self, universe, recommender, user: TestUser) -> FrozenSet[ItemId]:
        return frozenset(user.train_items)

class AllItems:
    def select_items(self, universe, recommender, user: TestUser) -> FrozenSet[ItemId]:
        return frozenset(universe)

class CompoundSelector:
    """
    Combines named selectors left to right with set union ("+") and
    difference ("-"), e.g. ``allItems - user.trainItems``.
    """
    def __init__(self, first: ItemSelector, rest: List[Tuple[str, ItemSelector]]):
        self.first = first
        self.rest = rest

    def select_items(self, universe: AbstractSet[ItemId], recommender: Recommender,
                     user: TestUser) -> FrozenSet[ItemId]:
        items = frozenset(self.first.select_items(universe, recommender, user))
        for op, selector in self.rest:
            other = selector.select_items(universe, recommender, user)
            if op == "+":
                items = items | other
            else:
                items = items - other
        return items

_SELECTORS: Dict[str, Callable[[], ItemSelector]] = {
    "user.testItems": UserTestItems,
    "user.trainItems": UserTrainItems,
    "allItems": AllItems,
}

_TOKEN = re.compile(r"\s*([+-])\s*")

def get_selector(name: str) -> ItemSelector:
    """
    Factory function to get a built-in selector by name.

    Args:
        name (str): "user.testItems", "user.trainItems" or "allItems"

    Raises:
        ConfigurationError: if the name is unknown.
    """
    factory = _SELECTORS.get(name)
    if factory is None:
        raise ConfigurationError(f"unknown item selector: {name!r}")
    return factory()

def compile_selector(expr: str) -> ItemSelector:
    """
    セレクタ式をコンパイルする。単独の名前ならそのセレクタを、
    "+" / "-" を含む場合は CompoundSelector を返す。
    不正な式はここで ConfigurationError となる（ユーザー評価前に検出する）。
    """
    if expr is None or not expr.strip():
        raise ConfigurationError("item selector expression is empty")

    parts = _TOKEN.split(expr.strip())
    # split結果は [名前, 演算子, 名前, 演算子, ...] の形になる
    names = parts[0::2]
    ops = parts[1::2]
    for name in names:
        if not name:
            raise ConfigurationError(f"malformed item selector expression: {expr!r}")

    first = get_selector(names[0])
    if not ops:
        return first

    rest = [(op, get_selector(name)) for op, name in zip(ops, names[1:])]
    return CompoundSelector(first, rest)
