"""ATS score and job-keyword endpoints for Web API v1."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_store
from .chat import TurnResponse, turn_response
from .sessions import session_view
from ....store import InMemorySessionStore
from .....domain.ats_scorer import score_label

router = APIRouter(prefix="/sessions", tags=["analysis"])


class ScoreIssueView(BaseModel):
    type: str
    text: str
    priority: str


class ScoreResponse(BaseModel):
    score: int
    label: str
    issues: List[ScoreIssueView]


class KeywordMatchRequest(BaseModel):
    job_description: str = Field(max_length=50_000)


class KeywordMatchResponse(BaseModel):
    analysis: Optional[Dict[str, Any]] = None


@router.get("/{session_id}/ats-score", response_model=ScoreResponse)
async def get_ats_score(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> ScoreResponse:
    result = await store.score(session_id)
    return ScoreResponse(
        score=result.score,
        label=score_label(result.score),
        issues=[ScoreIssueView(**issue) for issue in result.to_dict()["issues"]],
    )


@router.post("/{session_id}/keyword-match", response_model=KeywordMatchResponse)
async def keyword_match(
    session_id: str,
    request: KeywordMatchRequest,
    store: InMemorySessionStore = Depends(get_store),
) -> KeywordMatchResponse:
    analysis = await store.analyze_keywords(session_id, request.job_description)
    return KeywordMatchResponse(analysis=analysis.to_dict() if analysis else None)


@router.post("/{session_id}/keyword-match/add-missing", response_model=TurnResponse)
async def add_missing_keywords(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> TurnResponse:
    result = await store.add_missing_keywords(session_id)
    return turn_response(result, session_view(await store.get_session(session_id)))
