"""Legacy fine-tune jobs.

Deprecated by the service in favour of fine-tuning jobs (see ``fine_tuning_job``).
"""

from __future__ import annotations

import dataclasses
from typing import Any

from .request_builder import ApiCall, RequestBuilder

FINE_TUNES_SUFFIX = "/fine-tunes"

_BUILDER = RequestBuilder()


def _omit(name: str | None = None) -> dict[str, Any]:
    metadata: dict[str, Any] = {"omitempty": True}
    if name is not None:
        metadata["json"] = name
    return metadata


@dataclasses.dataclass
class FineTuneRequest:
    training_file: str = ""
    validation_file: str = dataclasses.field(default="", metadata=_omit())
    model: str = dataclasses.field(default="", metadata=_omit())
    epochs: int = dataclasses.field(default=0, metadata=_omit("n_epochs"))
    batch_size: int = dataclasses.field(default=0, metadata=_omit())
    learning_rate_multiplier: float = dataclasses.field(default=0.0, metadata=_omit())
    prompt_loss_rate: float = dataclasses.field(default=0.0, metadata=_omit())
    compute_classification_metrics: bool = dataclasses.field(default=False, metadata=_omit())
    classification_classes: int = dataclasses.field(
        default=0, metadata=_omit("classification_n_classes")
    )
    classification_positive_class: str = dataclasses.field(default="", metadata=_omit())
    classification_betas: list[float] | None = dataclasses.field(default=None, metadata=_omit())
    suffix: str = dataclasses.field(default="", metadata=_omit())


@dataclasses.dataclass
class FineTuneEvent:
    object: str = ""
    created_at: int = 0
    level: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuneEvent:
        data = data or {}
        return cls(
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            level=data.get("level") or "",
            message=data.get("message") or "",
        )


@dataclasses.dataclass
class FineTuneHyperParams:
    batch_size: int = 0
    learning_rate_multiplier: float = 0.0
    epochs: int = dataclasses.field(default=0, metadata={"json": "n_epochs"})
    prompt_loss_weight: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuneHyperParams:
        data = data or {}
        return cls(
            batch_size=data.get("batch_size") or 0,
            learning_rate_multiplier=float(data.get("learning_rate_multiplier") or 0.0),
            epochs=data.get("n_epochs") or 0,
            prompt_loss_weight=float(data.get("prompt_loss_weight") or 0.0),
        )


@dataclasses.dataclass
class FineTune:
    """A fine-tune job; file entries are kept as the plain objects the server sends."""

    id: str = ""
    object: str = ""
    model: str = ""
    created_at: int = 0
    fine_tune_event_list: list[FineTuneEvent] = dataclasses.field(
        default_factory=list, metadata=_omit("events")
    )
    fine_tuned_model: str = ""
    hyper_params: FineTuneHyperParams = dataclasses.field(
        default_factory=FineTuneHyperParams, metadata={"json": "hyperparams"}
    )
    organization_id: str = ""
    result_files: list[dict[str, Any]] | None = None
    status: str = ""
    validation_files: list[dict[str, Any]] | None = None
    training_files: list[dict[str, Any]] | None = None
    updated_at: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTune:
        data = data or {}
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            model=data.get("model") or "",
            created_at=data.get("created_at") or 0,
            fine_tune_event_list=[FineTuneEvent.from_dict(item) for item in data.get("events") or []],
            fine_tuned_model=data.get("fine_tuned_model") or "",
            hyper_params=FineTuneHyperParams.from_dict(data.get("hyperparams")),
            organization_id=data.get("organization_id") or "",
            result_files=data.get("result_files"),
            status=data.get("status") or "",
            validation_files=data.get("validation_files"),
            training_files=data.get("training_files"),
            updated_at=data.get("updated_at") or 0,
        )


@dataclasses.dataclass
class FineTuneList:
    object: str = ""
    data: list[FineTune] = dataclasses.field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuneList:
        data = data or {}
        return cls(
            object=data.get("object") or "",
            data=[FineTune.from_dict(item) for item in data.get("data") or []],
        )


@dataclasses.dataclass
class FineTuneEventList:
    object: str = ""
    data: list[FineTuneEvent] = dataclasses.field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuneEventList:
        data = data or {}
        return cls(
            object=data.get("object") or "",
            data=[FineTuneEvent.from_dict(item) for item in data.get("data") or []],
        )


@dataclasses.dataclass
class FineTuneDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FineTuneDeleteResponse:
        data = data or {}
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


def create_fine_tune(request: FineTuneRequest) -> ApiCall:
    """Request a new fine-tune; the reply is a ``FineTune``."""
    return _BUILDER.build("POST", FINE_TUNES_SUFFIX, request)


def cancel_fine_tune(fine_tune_id: str) -> ApiCall:
    """Request cancelling a fine-tune; the reply is a ``FineTune``."""
    return _BUILDER.build("POST", f"{FINE_TUNES_SUFFIX}/{fine_tune_id}/cancel")


def list_fine_tunes() -> ApiCall:
    """Request the list of fine-tunes; the reply is a ``FineTuneList``."""
    return _BUILDER.build("GET", FINE_TUNES_SUFFIX)


def get_fine_tune(fine_tune_id: str) -> ApiCall:
    """Request one fine-tune; the reply is a ``FineTune``."""
    return _BUILDER.build("GET", f"{FINE_TUNES_SUFFIX}/{fine_tune_id}")


def delete_fine_tune(fine_tune_id: str) -> ApiCall:
    """Request deleting a fine-tune; the reply is a ``FineTuneDeleteResponse``."""
    return _BUILDER.build("DELETE", f"{FINE_TUNES_SUFFIX}/{fine_tune_id}")


def list_fine_tune_events(fine_tune_id: str) -> ApiCall:
    """Request the events of a fine-tune; the reply is a ``FineTuneEventList``."""
    return _BUILDER.build("GET", f"{FINE_TUNES_SUFFIX}/{fine_tune_id}/events")