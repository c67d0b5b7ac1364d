"""Request handlers for the question and answer routes."""

from __future__ import annotations

import json
import logging
from urllib.parse import parse_qsl

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from qanda.errors import BodyDeserializeError
from qanda.store import Store
from qanda.types import Answer, Question, extract_pagination

logger = logging.getLogger(__name__)


def _store(request: Request) -> Store:
    return request.app.state.store


async def _question_body(request: Request) -> Question:
    raw = await request.body()
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise BodyDeserializeError(str(exc)) from exc
    return Question.from_dict(data)


async def _form_body(request: Request) -> dict[str, str]:
    raw = await request.body()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BodyDeserializeError(str(exc)) from exc
    return dict(parse_qsl(text, keep_blank_values=True))


async def get_questions(request: Request) -> JSONResponse:
    """List the questions, optionally sliced by ``start`` and ``end``."""
    store = _store(request)
    logger.debug("store: %r", store)
    params = dict(request.query_params)
    questions = store.all_questions()
    if params:
        pagination = extract_pagination(params).saturate(len(questions))
        questions = questions[pagination.start : pagination.end]
    return JSONResponse([question.to_dict() for question in questions])


async def get_one_question(request: Request) -> JSONResponse:
    """Return the question named in the path."""
    question = _store(request).get_question(request.path_params["id"])
    return JSONResponse(question.to_dict())


async def add_question(request: Request) -> PlainTextResponse:
    """Store the question sent as JSON."""
    question = await _question_body(request)
    _store(request).add_question(question)
    return PlainTextResponse("Question added!")


async def update_question(request: Request) -> PlainTextResponse:
    """Replace the question named in the path with the one sent as JSON."""
    question = await _question_body(request)
    _store(request).update_question(request.path_params["id"], question)
    return PlainTextResponse("Question updated!")


async def delete_question(request: Request) -> PlainTextResponse:
    """Remove the question named in the path."""
    _store(request).delete_question(request.path_params["id"])
    return PlainTextResponse("Question deleted")


async def add_answer(request: Request) -> PlainTextResponse:
    """Store the answer sent as url-encoded form fields."""
    params = await _form_body(request)
    _store(request).add_answer(Answer.from_form(params))
    return PlainTextResponse("Answer added")


def route_table() -> list[Route]:
    """Return the routes of the question service."""
    return [
        Route("/questions", get_questions, methods=["GET"]),
        Route("/questions/{id}", get_one_question, methods=["GET"]),
        Route("/questions", add_question, methods=["POST"]),
        Route("/questions/{id}", update_question, methods=["PUT"]),
        Route("/questions/{id}", delete_question, methods=["DELETE"]),
        Route("/answers", add_answer, methods=["POST"]),
    ]