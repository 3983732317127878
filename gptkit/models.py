"""Model listing, retrieval and deletion."""

from __future__ import annotations

import dataclasses
from typing import Any

from .request_builder import ApiCall, RequestBuilder

_BUILDER = RequestBuilder()


@dataclasses.dataclass
class Permission:
    created_at: int = dataclasses.field(default=0, metadata={"json": "created"})
    id: str = ""
    object: str = ""
    allow_create_engine: bool = False
    allow_sampling: bool = False
    allow_logprobs: bool = False
    allow_search_indices: bool = False
    allow_view: bool = False
    allow_fine_tuning: bool = False
    organization: str = ""
    group: Any = None
    is_blocking: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Permission:
        data = data or {}
        return cls(
            created_at=data.get("created") or 0,
            id=data.get("id") or "",
            object=data.get("object") or "",
            allow_create_engine=bool(data.get("allow_create_engine")),
            allow_sampling=bool(data.get("allow_sampling")),
            allow_logprobs=bool(data.get("allow_logprobs")),
            allow_search_indices=bool(data.get("allow_search_indices")),
            allow_view=bool(data.get("allow_view")),
            allow_fine_tuning=bool(data.get("allow_fine_tuning")),
            organization=data.get("organization") or "",
            group=data.get("group"),
            is_blocking=bool(data.get("is_blocking")),
        )


@dataclasses.dataclass
class Model:
    created_at: int = dataclasses.field(default=0, metadata={"json": "created"})
    id: str = ""
    object: str = ""
    owned_by: str = ""
    permission: list[Permission] = dataclasses.field(default_factory=list)
    root: str = ""
    parent: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Model:
        data = data or {}
        return cls(
            created_at=data.get("created") or 0,
            id=data.get("id") or "",
            object=data.get("object") or "",
            owned_by=data.get("owned_by") or "",
            permission=[Permission.from_dict(item) for item in data.get("permission") or []],
            root=data.get("root") or "",
            parent=data.get("parent") or "",
        )


@dataclasses.dataclass
class FineTuneModelDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuneModelDeleteResponse:
        data = data or {}
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


@dataclasses.dataclass
class ModelsList:
    models: list[Model] = dataclasses.field(default_factory=list, metadata={"json": "data"})

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ModelsList:
        data = data or {}
        return cls(models=[Model.from_dict(item) for item in data.get("data") or []])


def list_models() -> ApiCall:
    """Request for the list of available models; the reply is a ``ModelsList``."""
    return _BUILDER.build("GET", "/models")


def get_model(model_id: str) -> ApiCall:
    """Request for one model; the reply is a ``Model``."""
    return _BUILDER.build("GET", f"/models/{model_id}")


def delete_fine_tune_model(model_id: str) -> ApiCall:
    """Request deleting a fine-tuned model; the reply is a ``FineTuneModelDeleteResponse``."""
    return _BUILDER.build("DELETE", f"/models/{model_id}")