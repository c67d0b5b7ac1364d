"""In-memory storage of questions and answers."""

from __future__ import annotations

import json
import threading
from collections.abc import Mapping

from qanda.errors import BodyDeserializeError, QuestionNotFound
from qanda.types import Answer, Question


def load_questions(text: str) -> dict[str, Question]:
    """Decode a JSON object mapping question ids to questions."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"can't read questions: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("can't read questions: expected a JSON object")
    try:
        return {key: Question.from_dict(value) for key, value in data.items()}
    except BodyDeserializeError as exc:
        raise ValueError(f"can't read questions: {exc}") from exc


class Store:
    """Questions and answers shared between request handlers."""

    def __init__(self, questions: Mapping[str, Question] | None = None) -> None:
        self._lock = threading.RLock()
        self._questions: dict[str, Question] = dict(questions or {})
        self._answers: dict[str, Answer] = {}

    def all_questions(self) -> list[Question]:
        """Return every stored question."""
        with self._lock:
            return list(self._questions.values())

    def get_question(self, question_id: str) -> Question:
        """Return the question stored under ``question_id``."""
        with self._lock:
            try:
                return self._questions[question_id]
            except KeyError:
                raise QuestionNotFound() from None

    def add_question(self, question: Question) -> None:
        """Store a question under its own id, replacing any earlier one."""
        with self._lock:
            self._questions[question.id] = question

    def update_question(self, question_id: str, question: Question) -> None:
        """Replace the question stored under ``question_id``."""
        with self._lock:
            if question_id not in self._questions:
                raise QuestionNotFound()
            self._questions[question_id] = question

    def delete_question(self, question_id: str) -> Question:
        """Remove and return the question stored under ``question_id``."""
        with self._lock:
            try:
                return self._questions.pop(question_id)
            except KeyError:
                raise QuestionNotFound() from None

    def add_answer(self, answer: Answer) -> None:
        """Store an answer under its own id, replacing any earlier one."""
        with self._lock:
            self._answers[answer.id] = answer

    def answers(self) -> dict[str, Answer]:
        """Return a copy of the stored answers keyed by id."""
        with self._lock:
            return dict(self._answers)