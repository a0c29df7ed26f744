"""Personality-fit categories used by the interview scorer."""
from __future__ import annotations

from typing import Dict, Literal, Tuple

from pydantic import BaseModel, ConfigDict

CategoryId = Literal["creator", "explorer", "helper", "analyzer", "socializer"]


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: CategoryId
    title: str
    description: str
    traits: Tuple[str, ...]
    color: str
    icon: str


# Declaration order is significant: it is the tie-break order for the top category.
CATEGORIES: Dict[str, Category] = {
    category.id: category
    for category in (
        Category(
            id="creator",
            title="The Creator",
            description=(
                "You thrive on bringing ideas to life! Whether it's art, code, writing, or any other "
                "form of expression, you love the process of making something new."
            ),
            traits=("Imaginative", "Innovative", "Expressive", "Hands-on"),
            color="#14b8a6",
            icon="🎨",
        ),
        Category(
            id="explorer",
            title="The Explorer",
            description=(
                "Your curiosity knows no bounds! You love learning new things, discovering hidden gems, "
                "and expanding your knowledge across various domains."
            ),
            traits=("Curious", "Adventurous", "Open-minded", "Knowledge-seeker"),
            color="#6366f1",
            icon="🔍",
        ),
        Category(
            id="helper",
            title="The Helper",
            description=(
                "You find deep satisfaction in making a positive difference! Supporting others and "
                "contributing to their growth brings you genuine joy."
            ),
            traits=("Empathetic", "Supportive", "Generous", "Patient"),
            color="#ec4899",
            icon="💝",
        ),
        Category(
            id="analyzer",
            title="The Analyzer",
            description=(
                "You excel at breaking down complex problems! Logic, data, and systematic thinking are "
                "your superpowers for understanding the world."
            ),
            traits=("Logical", "Detail-oriented", "Strategic", "Problem-solver"),
            color="#8b5cf6",
            icon="🧠",
        ),
        Category(
            id="socializer",
            title="The Socializer",
            description=(
                "You thrive on human connection! Building relationships, sharing experiences, and "
                "bringing people together energizes you."
            ),
            traits=("Outgoing", "Collaborative", "Charismatic", "Team-player"),
            color="#f59e0b",
            icon="🤝",
        ),
    )
}

CATEGORY_ORDER: Tuple[str, ...] = tuple(CATEGORIES)
DEFAULT_CATEGORY = CATEGORY_ORDER[0]


def category_info(category_id: str) -> Category:
    """Look up a category, raising ``KeyError`` for unknown ids."""

    return CATEGORIES[category_id]


__all__ = ["Category", "CategoryId", "CATEGORIES", "CATEGORY_ORDER", "DEFAULT_CATEGORY", "category_info"]
