"""Fine-tuning jobs."""

from __future__ import annotations

import dataclasses
from typing import Any

from .fine_tunes import FineTuneEvent
from .request_builder import ApiCall, RequestBuilder, encode_query

JOBS_SUFFIX = "/fine_tuning/jobs"

_BUILDER = RequestBuilder()

_OMIT: dict[str, Any] = {"omitempty": True}


@dataclasses.dataclass
class Hyperparameters:
    """``epochs`` is a number or the string ``"auto"``."""

    epochs: Any = dataclasses.field(default=None, metadata={"json": "n_epochs", "omitempty": True})

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Hyperparameters:
        data = data or {}
        return cls(epochs=data.get("n_epochs"))


@dataclasses.dataclass
class FineTuningJob:
    id: str = ""
    object: str = ""
    created_at: int = 0
    finished_at: int = 0
    model: str = ""
    fine_tuned_model: str = dataclasses.field(default="", metadata=_OMIT)
    organization_id: str = ""
    status: str = ""
    hyperparameters: Hyperparameters = dataclasses.field(default_factory=Hyperparameters)
    training_file: str = ""
    validation_file: str = dataclasses.field(default="", metadata=_OMIT)
    result_files: list[str] | None = None
    trained_tokens: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuningJob:
        data = data or {}
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            finished_at=data.get("finished_at") or 0,
            model=data.get("model") or "",
            fine_tuned_model=data.get("fine_tuned_model") or "",
            organization_id=data.get("organization_id") or "",
            status=data.get("status") or "",
            hyperparameters=Hyperparameters.from_dict(data.get("hyperparameters")),
            training_file=data.get("training_file") or "",
            validation_file=data.get("validation_file") or "",
            result_files=data.get("result_files"),
            trained_tokens=data.get("trained_tokens") or 0,
        )


@dataclasses.dataclass
class FineTuningJobRequest:
    training_file: str = ""
    validation_file: str = dataclasses.field(default="", metadata=_OMIT)
    model: str = dataclasses.field(default="", metadata=_OMIT)
    hyperparameters: Hyperparameters | None = dataclasses.field(default=None, metadata=_OMIT)
    suffix: str = dataclasses.field(default="", metadata=_OMIT)


@dataclasses.dataclass
class FineTuningJobEventList:
    object: str = ""
    data: list[FineTuneEvent] = dataclasses.field(default_factory=list)
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuningJobEventList:
        data = data or {}
        return cls(
            object=data.get("object") or "",
            data=[FineTuneEvent.from_dict(item) for item in data.get("data") or []],
            has_more=bool(data.get("has_more")),
        )


@dataclasses.dataclass
class FineTuningJobEvent:
    object: str = ""
    id: str = ""
    created_at: int = 0
    level: str = ""
    message: str = ""
    data: Any = None
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuningJobEvent:
        data = data or {}
        return cls(
            object=data.get("object") or "",
            id=data.get("id") or "",
            created_at=data.get("created_at") or 0,
            level=data.get("level") or "",
            message=data.get("message") or "",
            data=data.get("data"),
            type=data.get("type") or "",
        )


def create_fine_tuning_job(request: FineTuningJobRequest) -> ApiCall:
    """Request a new fine-tuning job; the reply is a ``FineTuningJob``."""
    return _BUILDER.build("POST", JOBS_SUFFIX, request)


def cancel_fine_tuning_job(fine_tuning_job_id: str) -> ApiCall:
    """Request cancelling a job; the reply is a ``FineTuningJob``."""
    return _BUILDER.build("POST", f"{JOBS_SUFFIX}/{fine_tuning_job_id}/cancel")


def retrieve_fine_tuning_job(fine_tuning_job_id: str) -> ApiCall:
    """Request one job; the reply is a ``FineTuningJob``."""
    return _BUILDER.build("GET", f"{JOBS_SUFFIX}/{fine_tuning_job_id}")


def list_fine_tuning_job_events(
    fine_tuning_job_id: str,
    after: str | None = None,
    limit: int | None = None,
) -> ApiCall:
    """Request a job's events, optionally paged; the reply is a ``FineTuningJobEventList``."""
    query = encode_query({"after": after, "limit": limit})
    suffix = f"?{query}" if query else ""
    return _BUILDER.build("GET", f"{JOBS_SUFFIX}/{fine_tuning_job_id}/events{suffix}")