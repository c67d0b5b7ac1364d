"""Questions, answers and pagination of question lists."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from qanda.errors import BodyDeserializeError, MissingParameters, ParseError

logger = logging.getLogger(__name__)

_USIZE_MAX = 2**64 - 1
_DIGITS = frozenset("0123456789")


def parse_question_id(text: str) -> str:
    """Return ``text`` as a question id; an empty id is refused."""
    if not text:
        raise ValueError("No id provided")
    return text


def _debug_str(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass
class Question:
    """A question with optional tags."""

    id: str
    title: str
    content: str
    tags: list[str] | None = None

    def __str__(self) -> str:
        if self.tags is None:
            tags = "None"
        else:
            tags = "Some([" + ", ".join(_debug_str(tag) for tag in self.tags) + "])"
        return f"{self.id}, title: {self.title}, content: {self.content}, tags: {tags}"

    @classmethod
    def from_dict(cls, data: Any) -> Question:
        """Build a question from decoded JSON, refusing malformed input."""
        if not isinstance(data, Mapping):
            raise BodyDeserializeError("invalid type: expected struct Question")
        fields: dict[str, str] = {}
        for name in ("id", "title", "content"):
            if name not in data:
                raise BodyDeserializeError(f"missing field `{name}`")
            value = data[name]
            if not isinstance(value, str):
                raise BodyDeserializeError(
                    f"invalid type for field `{name}`: expected a string"
                )
            fields[name] = value
        tags = data.get("tags")
        if tags is not None:
            if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
                raise BodyDeserializeError(
                    "invalid type for field `tags`: expected a sequence of strings"
                )
            tags = list(tags)
        return cls(tags=tags, **fields)

    def to_dict(self) -> dict[str, Any]:
        """Return the question as a JSON-ready dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": None if self.tags is None else list(self.tags),
        }


@dataclass
class Answer:
    """An answer to a question."""

    id: str
    content: str
    question_id: str

    @classmethod
    def from_form(cls, params: Mapping[str, str]) -> Answer:
        """Build an answer from url-encoded form fields."""
        if not all(key in params for key in ("id", "content", "questionId")):
            raise MissingParameters()
        return cls(
            id=str(params["id"]),
            content=str(params["content"]),
            question_id=str(params["questionId"]),
        )

    def to_dict(self) -> dict[str, str]:
        """Return the answer as a JSON-ready dictionary."""
        return {"id": self.id, "content": self.content, "question_id": self.question_id}


@dataclass(frozen=True)
class Pagination:
    """A slice of the question list, from ``start`` up to but not including ``end``."""

    start: int
    end: int

    def sanitize(self) -> Pagination:
        """Return the range with its bounds in ascending order."""
        if self.start > self.end:
            return Pagination(start=self.end, end=self.start)
        return self

    def saturate(self, max_len: int) -> Pagination:
        """Return the range with ``end`` clamped to ``max_len``."""
        if self.end > max_len:
            logger.debug("Saturating! Level: %d", max_len)
            result = replace(self, end=max_len)
            logger.debug("Start: %d End: %d", result.start, result.end)
            return result
        return self


def _parse_usize(text: str) -> int:
    if not text:
        raise ParseError("cannot parse integer from empty string")
    digits = text[1:] if text.startswith("+") else text
    if not digits or not set(digits) <= _DIGITS:
        raise ParseError("invalid digit found in string")
    value = int(digits)
    if value > _USIZE_MAX:
        raise ParseError("number too large to fit in target type")
    return value


def extract_pagination(params: Mapping[str, str]) -> Pagination:
    """Read ``start`` and ``end`` from query parameters."""
    if "start" in params and "end" in params:
        start = _parse_usize(params["start"])
        end = _parse_usize(params["end"])
        return Pagination(start=start, end=end).sanitize()
    raise MissingParameters()


def sample_question() -> Question:
    """Return the fixed example question."""
    return Question(
        id=parse_question_id("1"),
        title="First Question",
        content="Content of Question",
        tags=["faq"],
    )