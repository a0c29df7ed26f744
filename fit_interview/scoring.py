"""Fit scoring: turn a sequence of selected option ids into category totals."""
from __future__ import annotations

import math
from typing import Dict, Iterable, Sequence, Tuple

from pydantic import BaseModel, computed_field

from .categories import CATEGORIES, CATEGORY_ORDER, Category
from .questions import QUESTIONS, Question

WeightIndex = Dict[str, Tuple[int, ...]]


class FitResult(BaseModel):
    category_scores: Dict[str, int]
    percentages: Dict[str, int]
    top_category: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def top_category_info(self) -> Category | None:
        return CATEGORIES.get(self.top_category)


def build_weight_index(questions: Iterable[Question], order: Tuple[str, ...] = CATEGORY_ORDER) -> WeightIndex:
    """Map every option id to its dense weight tuple."""

    return {option.id: option.dense_weights(order) for question in questions for option in question.options}


_DEFAULT_INDEX = build_weight_index(QUESTIONS)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score(
    answer_ids: Sequence[str],
    *,
    index: WeightIndex | None = None,
    order: Tuple[str, ...] = CATEGORY_ORDER,
) -> FitResult:
    """Score ``answer_ids`` against the weight tables.

    Unknown ids contribute nothing. Percentages are rounded per category, so
    they can sum to slightly more or less than 100. The top category is the
    first in ``order`` holding the strictly greatest score; with no positive
    score it is ``order[0]``.
    """

    weights = _DEFAULT_INDEX if index is None else index
    totals = [0] * len(order)
    for answer_id in answer_ids:
        option_weights = weights.get(answer_id)
        if option_weights is None:
            continue
        for slot, weight in enumerate(option_weights):
            totals[slot] += weight

    top_slot = 0
    top_score = 0
    for slot, value in enumerate(totals):
        if value > top_score:
            top_score = value
            top_slot = slot

    grand_total = sum(totals)
    percentages = {
        category: _round_half_up(value / grand_total * 100) if grand_total > 0 else 0
        for category, value in zip(order, totals)
    }
    return FitResult(
        category_scores=dict(zip(order, totals)),
        percentages=percentages,
        top_category=order[top_slot],
    )


__all__ = ["FitResult", "WeightIndex", "build_weight_index", "score"]
