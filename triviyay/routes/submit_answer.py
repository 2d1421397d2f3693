"""Answer submission endpoint.

POST validates and forwards one answer to the mutator; OPTIONS answers the
browser preflight. Both carry the same fixed CORS headers, and every failure
on POST (unparseable body, missing identifiers, mutator error) is a 400.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from triviyay.http.cors import POST_CORS_HEADERS
from triviyay.http.envelope import error_response, preflight_response, success_response
from triviyay.logic.submission import AnswerMutator, AnswerSubmissionHandler
from triviyay.routes.dependencies import get_answer_mutator

router = APIRouter()
logger = logging.getLogger(__name__)

SUBMIT_ANSWER_PATH = "/simulate-submit-answer"


@router.post(SUBMIT_ANSWER_PATH, summary="Submit an answer for a player")
async def submit_answer(
    request: Request,
    mutator: AnswerMutator = Depends(get_answer_mutator),
) -> JSONResponse:
    try:
        raw = await request.body()
        await AnswerSubmissionHandler(mutator).submit(raw)
    except Exception as exc:
        return error_response(exc, "submit_answer", POST_CORS_HEADERS)
    return success_response(POST_CORS_HEADERS)


@router.options(SUBMIT_ANSWER_PATH, summary="CORS preflight for answer submission")
async def submit_answer_preflight() -> JSONResponse:
    return preflight_response(POST_CORS_HEADERS)


__all__ = ["router", "submit_answer", "submit_answer_preflight"]
