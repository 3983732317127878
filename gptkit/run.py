"""Assistant runs and run steps."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, TypeVar

from .encoding import to_jsonable
from .request_builder import ApiCall, RequestBuilder, encode_query
from .thread import ASSISTANTS_BETA_HEADERS, ThreadRequest

_BUILDER = RequestBuilder()

_OMIT: dict[str, Any] = {"omitempty": True}

E = TypeVar("E", bound=Enum)


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RequiredActionType(str, Enum):
    SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"


class RunError(str, Enum):
    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class RunStepStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CANCELLING = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStepType(str, Enum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


def _enum(kind: type[E], value: Any) -> E | str:
    """Known values become enum members; unknown ones stay as strings."""
    try:
        return kind(value)
    except ValueError:
        return "" if value is None else str(value)


@dataclasses.dataclass
class SubmitToolOutputs:
    tool_calls: list[dict[str, Any]] = dataclasses.field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> SubmitToolOutputs:
        data = data or {}
        return cls(tool_calls=list(data.get("tool_calls") or []))


@dataclasses.dataclass
class RunRequiredAction:
    type: RequiredActionType | str = ""
    submit_tool_outputs: SubmitToolOutputs | None = dataclasses.field(default=None, metadata=_OMIT)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> RunRequiredAction:
        data = data or {}
        outputs = data.get("submit_tool_outputs")
        return cls(
            type=_enum(RequiredActionType, data.get("type")),
            submit_tool_outputs=SubmitToolOutputs.from_dict(outputs) if outputs is not None else None,
        )


@dataclasses.dataclass
class RunLastError:
    code: RunError | str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> RunLastError:
        data = data or {}
        return cls(code=_enum(RunError, data.get("code")), message=data.get("message") or "")


def _last_error(data: dict[str, Any]) -> RunLastError | None:
    value = data.get("last_error")
    return RunLastError.from_dict(value) if value is not None else None


@dataclasses.dataclass
class Run:
    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: RunStatus | str = ""
    required_action: RunRequiredAction | None = dataclasses.field(default=None, metadata=_OMIT)
    last_error: RunLastError | None = dataclasses.field(default=None, metadata=_OMIT)
    expires_at: int = 0
    started_at: int | None = dataclasses.field(default=None, metadata=_OMIT)
    cancelled_at: int | None = dataclasses.field(default=None, metadata=_OMIT)
    failed_at: int | None = dataclasses.field(default=None, metadata=_OMIT)
    completed_at: int | None = dataclasses.field(default=None, metadata=_OMIT)
    model: str = ""
    instructions: str = dataclasses.field(default="", metadata=_OMIT)
    tools: list[dict[str, Any]] | None = None
    file_ids: list[str] | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Run:
        data = data or {}
        action = data.get("required_action")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            thread_id=data.get("thread_id") or "",
            assistant_id=data.get("assistant_id") or "",
            status=_enum(RunStatus, data.get("status")),
            required_action=RunRequiredAction.from_dict(action) if action is not None else None,
            last_error=_last_error(data),
            expires_at=data.get("expires_at") or 0,
            started_at=data.get("started_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            model=data.get("model") or "",
            instructions=data.get("instructions") or "",
            tools=data.get("tools"),
            file_ids=data.get("file_ids"),
            metadata=data.get("metadata"),
        )


@dataclasses.dataclass
class RunRequest:
    """``model`` and ``instructions`` are sent only when not ``None``."""

    assistant_id: str = ""
    model: str | None = None
    instructions: str | None = None
    tools: list[Any] | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"assistant_id": self.assistant_id}
        if self.model is not None:
            result["model"] = self.model
        if self.instructions is not None:
            result["instructions"] = self.instructions
        if self.tools:
            result["tools"] = to_jsonable(self.tools)
        if self.metadata:
            result["metadata"] = to_jsonable(self.metadata)
        return result


@dataclasses.dataclass
class RunModifyRequest:
    metadata: dict[str, Any] | None = dataclasses.field(default=None, metadata=_OMIT)


@dataclasses.dataclass
class RunList:
    runs: list[Run] = dataclasses.field(default_factory=list, metadata={"json": "data"})

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> RunList:
        data = data or {}
        return cls(runs=[Run.from_dict(item) for item in data.get("data") or []])


@dataclasses.dataclass
class ToolOutput:
    tool_call_id: str = ""
    output: Any = None


@dataclasses.dataclass
class SubmitToolOutputsRequest:
    tool_outputs: list[ToolOutput] | None = None


@dataclasses.dataclass
class CreateThreadAndRunRequest(RunRequest):
    thread: ThreadRequest = dataclasses.field(default_factory=ThreadRequest)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["thread"] = to_jsonable(self.thread)
        return result


@dataclasses.dataclass
class StepDetailsMessageCreation:
    message_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> StepDetailsMessageCreation:
        data = data or {}
        return cls(message_id=data.get("message_id") or "")


@dataclasses.dataclass
class StepDetailsToolCalls:
    tool_calls: list[dict[str, Any]] = dataclasses.field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> StepDetailsToolCalls:
        data = data or {}
        return cls(tool_calls=list(data.get("tool_calls") or []))


@dataclasses.dataclass
class StepDetails:
    type: RunStepType | str = ""
    message_creation: StepDetailsMessageCreation | None = dataclasses.field(
        default=None, metadata=_OMIT
    )
    tool_calls: StepDetailsToolCalls | None = dataclasses.field(default=None, metadata=_OMIT)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> StepDetails:
        data = data or {}
        creation = data.get("message_creation")
        calls = data.get("tool_calls")
        return cls(
            type=_enum(RunStepType, data.get("type")),
            message_creation=(
                StepDetailsMessageCreation.from_dict(creation) if creation is not None else None
            ),
            tool_calls=StepDetailsToolCalls.from_dict(calls) if calls is not None else None,
        )


@dataclasses.dataclass
class RunStep:
    id: str = ""
    object: str = ""
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: RunStepType | str = ""
    status: RunStepStatus | str = ""
    step_details: StepDetails = dataclasses.field(default_factory=StepDetails)
    last_error: RunLastError | None = dataclasses.field(default=None, metadata=_OMIT)
    expired_at: int | None = dataclasses.field(default=None, metadata=_OMIT)
    cancelled_at: int | None = dataclasses.field(default=None, metadata=_OMIT)
    failed_at: int | None = dataclasses.field(default=None, metadata=_OMIT)
    completed_at: int | None = dataclasses.field(default=None, metadata=_OMIT)
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> RunStep:
        data = data or {}
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            assistant_id=data.get("assistant_id") or "",
            thread_id=data.get("thread_id") or "",
            run_id=data.get("run_id") or "",
            type=_enum(RunStepType, data.get("type")),
            status=_enum(RunStepStatus, data.get("status")),
            step_details=StepDetails.from_dict(data.get("step_details")),
            last_error=_last_error(data),
            expired_at=data.get("expired_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            metadata=data.get("metadata"),
        )


@dataclasses.dataclass
class RunStepList:
    run_steps: list[RunStep] = dataclasses.field(default_factory=list, metadata={"json": "data"})

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> RunStepList:
        data = data or {}
        return cls(run_steps=[RunStep.from_dict(item) for item in data.get("data") or []])


@dataclasses.dataclass
class Pagination:
    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def query(self) -> str:
        """The set parameters as a query string, sorted by key, without ``?``."""
        return encode_query(
            {"limit": self.limit, "order": self.order, "after": self.after, "before": self.before}
        )


def _with_query(path: str, pagination: Pagination | None) -> str:
    query = pagination.query() if pagination is not None else ""
    return f"{path}?{query}" if query else path


def create_run(thread_id: str, request: RunRequest) -> ApiCall:
    """Request a new run on a thread; the reply is a ``Run``."""
    return _BUILDER.build("POST", f"/threads/{thread_id}/runs", request, ASSISTANTS_BETA_HEADERS)


def retrieve_run(thread_id: str, run_id: str) -> ApiCall:
    """Request one run; the reply is a ``Run``."""
    return _BUILDER.build(
        "GET", f"/threads/{thread_id}/runs/{run_id}", None, ASSISTANTS_BETA_HEADERS
    )


def modify_run(thread_id: str, run_id: str, request: RunModifyRequest) -> ApiCall:
    """Request a change to a run's metadata; the reply is a ``Run``."""
    return _BUILDER.build(
        "POST", f"/threads/{thread_id}/runs/{run_id}", request, ASSISTANTS_BETA_HEADERS
    )


def list_runs(thread_id: str, pagination: Pagination | None = None) -> ApiCall:
    """Request the runs of a thread; the reply is a ``RunList``."""
    url = _with_query(f"/threads/{thread_id}/runs", pagination)
    return _BUILDER.build("GET", url, None, ASSISTANTS_BETA_HEADERS)


def submit_tool_outputs(
    thread_id: str, run_id: str, request: SubmitToolOutputsRequest
) -> ApiCall:
    """Request submitting tool outputs to a run; the reply is a ``Run``."""
    return _BUILDER.build(
        "POST",
        f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs",
        request,
        ASSISTANTS_BETA_HEADERS,
    )


def cancel_run(thread_id: str, run_id: str) -> ApiCall:
    """Request cancelling a run; the reply is a ``Run``."""
    return _BUILDER.build(
        "POST", f"/threads/{thread_id}/runs/{run_id}/cancel", None, ASSISTANTS_BETA_HEADERS
    )


def create_thread_and_run(request: CreateThreadAndRunRequest) -> ApiCall:
    """Request a new thread and a run on it; the reply is a ``Run``."""
    return _BUILDER.build("POST", "/threads/runs", request, ASSISTANTS_BETA_HEADERS)


def retrieve_run_step(thread_id: str, run_id: str, step_id: str) -> ApiCall:
    """Request one run step; the reply is a ``RunStep``."""
    return _BUILDER.build(
        "GET",
        f"/threads/{thread_id}/runs/{run_id}/steps/{step_id}",
        None,
        ASSISTANTS_BETA_HEADERS,
    )


def list_run_steps(thread_id: str, run_id: str, pagination: Pagination | None = None) -> ApiCall:
    """Request the steps of a run; the reply is a ``RunStepList``."""
    url = _with_query(f"/threads/{thread_id}/runs/{run_id}/steps", pagination)
    return _BUILDER.build("GET", url, None, ASSISTANTS_BETA_HEADERS)