"""Content moderation requests and results."""

from __future__ import annotations

import dataclasses
from typing import Any

from .request_builder import ApiCall, RequestBuilder

MODERATION_TEXT_STABLE = "text-moderation-stable"
MODERATION_TEXT_LATEST = "text-moderation-latest"
# Deprecated: use MODERATION_TEXT_STABLE or MODERATION_TEXT_LATEST.
MODERATION_TEXT_001 = "text-moderation-001"

VALID_MODERATION_MODELS = frozenset({MODERATION_TEXT_STABLE, MODERATION_TEXT_LATEST})

_BUILDER = RequestBuilder()


class ModerationInvalidModelError(ValueError):
    """Raised when a model other than the moderation models is requested."""

    def __init__(self) -> None:
        super().__init__(
            "this model is not supported with moderation, please use "
            "text-moderation-stable or text-moderation-latest instead"
        )


@dataclasses.dataclass
class ModerationRequest:
    input: str = dataclasses.field(default="", metadata={"omitempty": True})
    model: str = dataclasses.field(default="", metadata={"omitempty": True})


_CATEGORY_KEYS = {
    "hate": "hate",
    "hate_threatening": "hate/threatening",
    "self_harm": "self-harm",
    "sexual": "sexual",
    "sexual_minors": "sexual/minors",
    "violence": "violence",
    "violence_graphic": "violence/graphic",
}


def _key(name: str) -> dict[str, str]:
    return {"json": _CATEGORY_KEYS[name]}


@dataclasses.dataclass
class ResultCategories:
    hate: bool = dataclasses.field(default=False, metadata=_key("hate"))
    hate_threatening: bool = dataclasses.field(default=False, metadata=_key("hate_threatening"))
    self_harm: bool = dataclasses.field(default=False, metadata=_key("self_harm"))
    sexual: bool = dataclasses.field(default=False, metadata=_key("sexual"))
    sexual_minors: bool = dataclasses.field(default=False, metadata=_key("sexual_minors"))
    violence: bool = dataclasses.field(default=False, metadata=_key("violence"))
    violence_graphic: bool = dataclasses.field(default=False, metadata=_key("violence_graphic"))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResultCategories:
        data = data or {}
        return cls(**{name: bool(data.get(key)) for name, key in _CATEGORY_KEYS.items()})


@dataclasses.dataclass
class ResultCategoryScores:
    hate: float = dataclasses.field(default=0.0, metadata=_key("hate"))
    hate_threatening: float = dataclasses.field(default=0.0, metadata=_key("hate_threatening"))
    self_harm: float = dataclasses.field(default=0.0, metadata=_key("self_harm"))
    sexual: float = dataclasses.field(default=0.0, metadata=_key("sexual"))
    sexual_minors: float = dataclasses.field(default=0.0, metadata=_key("sexual_minors"))
    violence: float = dataclasses.field(default=0.0, metadata=_key("violence"))
    violence_graphic: float = dataclasses.field(default=0.0, metadata=_key("violence_graphic"))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResultCategoryScores:
        data = data or {}
        return cls(**{name: float(data.get(key) or 0.0) for name, key in _CATEGORY_KEYS.items()})


@dataclasses.dataclass
class Result:
    categories: ResultCategories = dataclasses.field(default_factory=ResultCategories)
    category_scores: ResultCategoryScores = dataclasses.field(default_factory=ResultCategoryScores)
    flagged: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Result:
        data = data or {}
        return cls(
            categories=ResultCategories.from_dict(data.get("categories")),
            category_scores=ResultCategoryScores.from_dict(data.get("category_scores")),
            flagged=bool(data.get("flagged")),
        )


@dataclasses.dataclass
class ModerationResponse:
    id: str = ""
    model: str = ""
    results: list[Result] = dataclasses.field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ModerationResponse:
        data = data or {}
        return cls(
            id=data.get("id") or "",
            model=data.get("model") or "",
            results=[Result.from_dict(item) for item in data.get("results") or []],
        )


def moderations(request: ModerationRequest) -> ApiCall:
    """Request a moderation check; the reply is a ``ModerationResponse``.

    An empty model lets the server choose; any other model must be a moderation model.
    """
    if request.model and request.model not in VALID_MODERATION_MODELS:
        raise ModerationInvalidModelError()
    return _BUILDER.build("POST", "/moderations", request)