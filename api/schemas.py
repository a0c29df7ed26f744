"""Pydantic schemas for the ZONE HTTP API."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from config.settings import settings
from fit_interview import FitResult, Question
from zone_chat import ChatMessage


class ScoreReq(BaseModel):
    answers: List[str] = Field(default_factory=list)


class SelectReq(BaseModel):
    option_id: str


class InterviewResp(BaseModel):
    session_id: str
    phase: Literal["asking", "results"]
    question_index: int
    question_number: int
    total_questions: int
    progress: float
    can_go_back: bool
    answers: List[str]
    question: Optional[Question] = None
    result: Optional[FitResult] = None
    accepted: Optional[bool] = None
    transition_delay_ms: int


class OpenReq(BaseModel):
    open: bool


class ZoneReq(BaseModel):
    zone_id: Optional[str] = None


class PositionReq(BaseModel):
    x: float
    y: float
    viewport_width: Optional[int] = Field(default=None, ge=0)
    viewport_height: Optional[int] = Field(default=None, ge=0)


class SendReq(BaseModel):
    content: str


class ChatEventResp(BaseModel):
    added: List[ChatMessage] = Field(default_factory=list)


class GenerateReq(BaseModel):
    prompt: Optional[str] = None
    model: str = Field(default_factory=lambda: settings.LLM_MODEL)


class GenerateResp(BaseModel):
    text: str
