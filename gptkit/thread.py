"""Assistant conversation threads."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

from .request_builder import ApiCall, RequestBuilder

THREADS_SUFFIX = "/threads"
ASSISTANTS_BETA_HEADERS = {"OpenAI-Beta": "assistants=v1"}

_BUILDER = RequestBuilder()


class ThreadMessageRole(str, Enum):
    USER = "user"


@dataclasses.dataclass
class Thread:
    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Thread:
        data = data or {}
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            metadata=data.get("metadata"),
        )


@dataclasses.dataclass
class ThreadMessage:
    role: ThreadMessageRole | str = ThreadMessageRole.USER
    content: str = ""
    file_ids: list[str] | None = dataclasses.field(default=None, metadata={"omitempty": True})
    metadata: dict[str, Any] | None = dataclasses.field(default=None, metadata={"omitempty": True})


@dataclasses.dataclass
class ThreadRequest:
    messages: list[ThreadMessage] | None = dataclasses.field(default=None, metadata={"omitempty": True})
    metadata: dict[str, Any] | None = dataclasses.field(default=None, metadata={"omitempty": True})


@dataclasses.dataclass
class ModifyThreadRequest:
    metadata: dict[str, Any] | None = None


@dataclasses.dataclass
class ThreadDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ThreadDeleteResponse:
        data = data or {}
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


def create_thread(request: ThreadRequest) -> ApiCall:
    """Request a new thread; the reply is a ``Thread``."""
    return _BUILDER.build("POST", THREADS_SUFFIX, request, ASSISTANTS_BETA_HEADERS)


def retrieve_thread(thread_id: str) -> ApiCall:
    """Request one thread; the reply is a ``Thread``."""
    return _BUILDER.build("GET", f"{THREADS_SUFFIX}/{thread_id}", None, ASSISTANTS_BETA_HEADERS)


def modify_thread(thread_id: str, request: ModifyThreadRequest) -> ApiCall:
    """Request a change to a thread's metadata; the reply is a ``Thread``."""
    return _BUILDER.build("POST", f"{THREADS_SUFFIX}/{thread_id}", request, ASSISTANTS_BETA_HEADERS)


def delete_thread(thread_id: str) -> ApiCall:
    """Request deleting a thread; the reply is a ``ThreadDeleteResponse``."""
    return _BUILDER.build("DELETE", f"{THREADS_SUFFIX}/{thread_id}", None, ASSISTANTS_BETA_HEADERS)