"""Personality-fit interview: category model, question bank, scorer and flow."""
from .categories import CATEGORIES, CATEGORY_ORDER, DEFAULT_CATEGORY, Category, category_info
from .flow import FlowSnapshot, InterviewFlow, InvalidOptionError
from .questions import QUESTIONS, Option, Question
from .scoring import FitResult, build_weight_index, score

__all__ = [
    "CATEGORIES",
    "CATEGORY_ORDER",
    "DEFAULT_CATEGORY",
    "Category",
    "category_info",
    "FlowSnapshot",
    "InterviewFlow",
    "InvalidOptionError",
    "QUESTIONS",
    "Option",
    "Question",
    "FitResult",
    "build_weight_index",
    "score",
]
