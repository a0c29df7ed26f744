"""Question bank for the fit interview.

Each option weights one or more categories; categories an option does not
mention count as zero. Option ids are unique across the whole bank.
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from .categories import CATEGORY_ORDER, CategoryId


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    icon: str
    scores: Dict[CategoryId, PositiveInt]

    def dense_weights(self, order: Tuple[str, ...] = CATEGORY_ORDER) -> Tuple[int, ...]:
        """Weights as a fixed-size tuple following ``order``."""
        return tuple(self.scores.get(category, 0) for category in order)  # type: ignore[call-overload]


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    question: str
    subtitle: Optional[str] = None
    options: Tuple[Option, ...] = Field(min_length=1)

    def option_ids(self) -> Tuple[str, ...]:
        return tuple(option.id for option in self.options)


def _opt(option_id: str, text: str, icon: str, **scores: int) -> Option:
    return Option(id=option_id, text=text, icon=icon, scores=scores)


QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="hobby",
        question="What's your favorite way to spend free time?",
        subtitle="Choose the one that sounds most appealing to you",
        options=(
            _opt("create-something", "Creating something new", "✨", creator=5, explorer=2),
            _opt("learn-new", "Learning something new", "📚", explorer=5, analyzer=3),
            _opt("help-others", "Helping friends or community", "🤲", helper=5, socializer=2),
            _opt("solve-puzzles", "Solving puzzles or problems", "🧩", analyzer=5, explorer=2),
            _opt("hang-out", "Hanging out with people", "🎉", socializer=5, helper=2),
        ),
    ),
    Question(
        id="content",
        question="What kind of content do you enjoy most?",
        subtitle="Pick your go-to type",
        options=(
            _opt("tutorials", "Tutorials & how-tos", "🎓", explorer=4, analyzer=3),
            _opt("creative-work", "Creative works (art, music, stories)", "🎭", creator=5, explorer=2),
            _opt("inspiring-stories", "Inspiring stories & testimonials", "💫", helper=4, socializer=3),
            _opt("analysis-data", "Data, analysis, & research", "📊", analyzer=5, explorer=2),
            _opt("social-trends", "Social trends & conversations", "💬", socializer=5, explorer=2),
        ),
    ),
    Question(
        id="work-style",
        question="How do you prefer to work on projects?",
        subtitle="What energizes you most?",
        options=(
            _opt("solo-creative", "Independently with creative freedom", "🎨", creator=5, analyzer=2),
            _opt("research-learn", "Researching and learning as I go", "🔬", explorer=5, analyzer=3),
            _opt("collaborate", "Collaborating with others", "👥", socializer=4, helper=4),
            _opt("plan-execute", "Planning carefully then executing", "📋", analyzer=5, creator=2),
            _opt("guide-mentor", "Guiding or mentoring teammates", "🌟", helper=5, socializer=3),
        ),
    ),
    Question(
        id="achievement",
        question="What makes you feel most accomplished?",
        subtitle="Your biggest source of satisfaction",
        options=(
            _opt("made-something", "Building something from scratch", "🏗️", creator=5, analyzer=2),
            _opt("mastered-skill", "Mastering a new skill", "🎯", explorer=5, analyzer=3),
            _opt("helped-someone", "Making someone's day better", "❤️", helper=5, socializer=2),
            _opt("solved-complex", "Solving a complex challenge", "🔐", analyzer=5, explorer=2),
            _opt("brought-together", "Bringing people together", "🌈", socializer=5, helper=3),
        ),
    ),
    Question(
        id="describes-you",
        question="Which word describes you best?",
        subtitle="Trust your gut!",
        options=(
            _opt("innovative", "Innovative", "💡", creator=5, explorer=2),
            _opt("curious", "Curious", "🤔", explorer=5, analyzer=2),
            _opt("caring", "Caring", "💚", helper=5, socializer=2),
            _opt("strategic", "Strategic", "♟️", analyzer=5, creator=1),
            _opt("friendly", "Friendly", "😊", socializer=5, helper=3),
        ),
    ),
)


def check_unique_option_ids(questions: Iterable[Question]) -> None:
    """Raise ``ValueError`` if any option id appears twice in ``questions``."""

    seen: set[str] = set()
    for question in questions:
        for option_id in question.option_ids():
            if option_id in seen:
                raise ValueError(f"Duplicate option id: {option_id}")
            seen.add(option_id)


check_unique_option_ids(QUESTIONS)

__all__ = ["Option", "Question", "QUESTIONS", "check_unique_option_ids"]
