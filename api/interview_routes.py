"""FastAPI routes for the fit interview."""
from __future__ import annotations

import uuid
from typing import Dict, List

from fastapi import APIRouter, HTTPException

from api.schemas import InterviewResp, ScoreReq, SelectReq
from config.settings import settings
from fit_interview import CATEGORIES, QUESTIONS, Category, FitResult, InterviewFlow, InvalidOptionError, Question, score
from fit_interview.checkpointer import load_checkpoint, save_checkpoint
from observability import log_event
from storage.results import insert_fit_result


router = APIRouter(prefix="/api/fit-interview")


def _record_result(flow: InterviewFlow, result: FitResult) -> None:
    insert_fit_result(
        session_id=flow.session_id,
        answers=list(flow.answers),
        category_scores=result.category_scores,
        percentages=result.percentages,
        top_category=result.top_category,
    )
    log_event("interview_complete", flow.session_id, top_category=result.top_category)


def _load_flow(session_id: str) -> InterviewFlow:
    try:
        uuid.UUID(session_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail="session not found") from exc
    snapshot = load_checkpoint(session_id)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="session not found")
    return InterviewFlow.from_snapshot(snapshot, transition_delay_s=0, on_complete=_record_result)


def _resp(flow: InterviewFlow, *, accepted: bool | None = None) -> InterviewResp:
    return InterviewResp(
        session_id=flow.session_id,
        phase="results" if flow.showing_results else "asking",
        question_index=flow.question_index,
        question_number=flow.question_number,
        total_questions=flow.total_questions,
        progress=flow.progress,
        can_go_back=flow.can_go_back,
        answers=list(flow.answers),
        question=flow.current_question,
        result=flow.result() if flow.showing_results else None,
        accepted=accepted,
        transition_delay_ms=settings.TRANSITION_DELAY_MS,
    )


@router.get("/questions", response_model=List[Question])
def questions() -> List[Question]:
    return list(QUESTIONS)


@router.get("/categories", response_model=Dict[str, Category])
def categories() -> Dict[str, Category]:
    return dict(CATEGORIES)


@router.post("/score", response_model=FitResult)
def score_answers(req: ScoreReq) -> FitResult:
    return score(req.answers)


@router.post("/sessions", response_model=InterviewResp)
def start() -> InterviewResp:
    flow = InterviewFlow(transition_delay_s=0, on_complete=_record_result)
    save_checkpoint(flow.snapshot())
    log_event("interview_start", flow.session_id)
    return _resp(flow)


@router.get("/sessions/{session_id}", response_model=InterviewResp)
def get_session(session_id: str) -> InterviewResp:
    return _resp(_load_flow(session_id))


@router.post("/sessions/{session_id}/select", response_model=InterviewResp)
def select(session_id: str, req: SelectReq) -> InterviewResp:
    flow = _load_flow(session_id)
    question_index = flow.question_index
    try:
        accepted = flow.select(req.option_id)
    except InvalidOptionError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    save_checkpoint(flow.snapshot())
    log_event(
        "interview_select",
        session_id,
        option_id=req.option_id,
        question_index=question_index,
        accepted=accepted,
    )
    return _resp(flow, accepted=accepted)


@router.post("/sessions/{session_id}/back", response_model=InterviewResp)
def back(session_id: str) -> InterviewResp:
    flow = _load_flow(session_id)
    accepted = flow.go_back()
    if accepted:
        save_checkpoint(flow.snapshot())
    log_event("interview_back", session_id, question_index=flow.question_index, accepted=accepted)
    return _resp(flow, accepted=accepted)


@router.post("/sessions/{session_id}/restart", response_model=InterviewResp)
def restart(session_id: str) -> InterviewResp:
    flow = _load_flow(session_id)
    flow.restart()
    save_checkpoint(flow.snapshot())
    log_event("interview_restart", session_id)
    return _resp(flow)
