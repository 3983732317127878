"""Image generation, editing and variation requests."""

from __future__ import annotations

import dataclasses
import io
from collections.abc import Callable
from typing import Any

from .form_builder import FormBuilder
from .request_builder import ApiCall, RequestBuilder

CREATE_IMAGE_SIZE_256X256 = "256x256"
CREATE_IMAGE_SIZE_512X512 = "512x512"
CREATE_IMAGE_SIZE_1024X1024 = "1024x1024"
# Supported by dall-e-3 only.
CREATE_IMAGE_SIZE_1792X1024 = "1792x1024"
CREATE_IMAGE_SIZE_1024X1792 = "1024x1792"

CREATE_IMAGE_RESPONSE_FORMAT_URL = "url"
CREATE_IMAGE_RESPONSE_FORMAT_B64_JSON = "b64_json"

CREATE_IMAGE_MODEL_DALL_E_2 = "dall-e-2"
CREATE_IMAGE_MODEL_DALL_E_3 = "dall-e-3"

CREATE_IMAGE_QUALITY_HD = "hd"
CREATE_IMAGE_QUALITY_STANDARD = "standard"

CREATE_IMAGE_STYLE_VIVID = "vivid"
CREATE_IMAGE_STYLE_NATURAL = "natural"

_BUILDER = RequestBuilder()

_OMIT: dict[str, Any] = {"omitempty": True}


@dataclasses.dataclass
class ImageRequest:
    prompt: str = dataclasses.field(default="", metadata=_OMIT)
    model: str = dataclasses.field(default="", metadata=_OMIT)
    n: int = dataclasses.field(default=0, metadata=_OMIT)
    quality: str = dataclasses.field(default="", metadata=_OMIT)
    size: str = dataclasses.field(default="", metadata=_OMIT)
    style: str = dataclasses.field(default="", metadata=_OMIT)
    response_format: str = dataclasses.field(default="", metadata=_OMIT)
    user: str = dataclasses.field(default="", metadata=_OMIT)


@dataclasses.dataclass
class ImageResponseDataInner:
    url: str = dataclasses.field(default="", metadata=_OMIT)
    b64_json: str = dataclasses.field(default="", metadata=_OMIT)
    revised_prompt: str = dataclasses.field(default="", metadata=_OMIT)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ImageResponseDataInner:
        data = data or {}
        return cls(
            url=data.get("url") or "",
            b64_json=data.get("b64_json") or "",
            revised_prompt=data.get("revised_prompt") or "",
        )


@dataclasses.dataclass
class ImageResponse:
    created: int = dataclasses.field(default=0, metadata=_OMIT)
    data: list[ImageResponseDataInner] = dataclasses.field(default_factory=list, metadata=_OMIT)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ImageResponse:
        data = data or {}
        return cls(
            created=data.get("created") or 0,
            data=[ImageResponseDataInner.from_dict(item) for item in data.get("data") or []],
        )


@dataclasses.dataclass
class ImageEditRequest:
    """``image`` and ``mask`` are open binary files; ``mask`` is optional."""

    image: Any = None
    mask: Any = None
    prompt: str = ""
    n: int = 0
    size: str = ""
    response_format: str = ""


@dataclasses.dataclass
class ImageVariRequest:
    """``image`` is an open binary file."""

    image: Any = None
    n: int = 0
    size: str = ""
    response_format: str = ""


def create_image(request: ImageRequest) -> ApiCall:
    """Request generated images; the reply is an ``ImageResponse``."""
    return _BUILDER.build("POST", "/images/generations", request)


def _multipart_call(url: str, body: io.BytesIO, builder: Any) -> ApiCall:
    return _BUILDER.build(
        "POST",
        url,
        io.BytesIO(body.getvalue()),
        {"Content-Type": builder.form_data_content_type()},
    )


def create_edit_image(
    request: ImageEditRequest,
    form_builder_factory: Callable[[Any], Any] = FormBuilder,
) -> ApiCall:
    """Request an edit of an image as a multipart form; the reply is an ``ImageResponse``."""
    body = io.BytesIO()
    builder = form_builder_factory(body)
    builder.create_form_file("image", request.image)
    if request.mask is not None:
        builder.create_form_file("mask", request.mask)
    builder.write_field("prompt", request.prompt)
    builder.write_field("n", str(request.n))
    builder.write_field("size", request.size)
    builder.write_field("response_format", request.response_format)
    builder.close()
    return _multipart_call("/images/edits", body, builder)


def create_vari_image(
    request: ImageVariRequest,
    form_builder_factory: Callable[[Any], Any] = FormBuilder,
) -> ApiCall:
    """Request variations of an image as a multipart form; the reply is an ``ImageResponse``."""
    body = io.BytesIO()
    builder = form_builder_factory(body)
    builder.create_form_file("image", request.image)
    builder.write_field("n", str(request.n))
    builder.write_field("size", request.size)
    builder.write_field("response_format", request.response_format)
    builder.close()
    return _multipart_call("/images/variations", body, builder)