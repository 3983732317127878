import io
import json
from email.parser import BytesParser
from email.policy import default as default_policy

import pytest

from gptkit.image import (
    CREATE_IMAGE_MODEL_DALL_E_3,
    CREATE_IMAGE_QUALITY_HD,
    CREATE_IMAGE_RESPONSE_FORMAT_URL,
    CREATE_IMAGE_SIZE_1024X1024,
    CREATE_IMAGE_STYLE_VIVID,
    ImageEditRequest,
    ImageRequest,
    ImageResponse,
    ImageResponseDataInner,
    ImageVariRequest,
    create_edit_image,
    create_image,
    create_vari_image,
)


class MockFailure(Exception):
    pass


class MockFormBuilder:
    def __init__(self, body, fail_file=None, fail_field=None, fail_close=False):
        self.body = body
        self.fail_file = fail_file
        self.fail_field = fail_field
        self.fail_close = fail_close
        self.calls = []

    def create_form_file(self, fieldname, file):
        self.calls.append(("file", fieldname))
        if self.fail_file is not None and self.fail_file in ("*", fieldname):
            raise MockFailure("mock form builder fail")

    def write_field(self, fieldname, value):
        self.calls.append(("field", fieldname, value))
        if fieldname == self.fail_field:
            raise MockFailure("mock form builder fail")

    def close(self):
        self.calls.append(("close",))
        if self.fail_close:
            raise MockFailure("mock form builder fail")

    def form_data_content_type(self):
        return ""


def _factory(**kwargs):
    created = []

    def make(body):
        builder = MockFormBuilder(body, **kwargs)
        created.append(builder)
        return builder

    return make, created


def _parts(call):
    raw = b"Content-Type: " + call.headers["Content-Type"].encode() + b"\r\n\r\n" + call.body
    message = BytesParser(policy=default_policy).parsebytes(raw)
    result = {}
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        result[name] = (part.get_filename(), part.get_payload(decode=True))
    return result


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "image.png"
    path.write_bytes(b"image-bytes")
    with path.open("rb") as handle:
        yield handle


@pytest.fixture
def mask_file(tmp_path):
    path = tmp_path / "mask.png"
    path.write_bytes(b"mask-bytes")
    with path.open("rb") as handle:
        yield handle


def test_create_image_request():
    call = create_image(
        ImageRequest(
            prompt="Lorem ipsum",
            model=CREATE_IMAGE_MODEL_DALL_E_3,
            n=1,
            quality=CREATE_IMAGE_QUALITY_HD,
            size=CREATE_IMAGE_SIZE_1024X1024,
            style=CREATE_IMAGE_STYLE_VIVID,
            response_format=CREATE_IMAGE_RESPONSE_FORMAT_URL,
            user="user",
        )
    )
    assert call.method == "POST"
    assert call.url == "/images/generations"
    assert json.loads(call.body) == {
        "prompt": "Lorem ipsum",
        "model": "dall-e-3",
        "n": 1,
        "quality": "hd",
        "size": "1024x1024",
        "style": "vivid",
        "response_format": "url",
        "user": "user",
    }


def test_create_image_omits_empty_fields():
    call = create_image(ImageRequest(prompt="cat"))
    assert json.loads(call.body) == {"prompt": "cat"}


def test_image_response_from_dict():
    response = ImageResponse.from_dict(
        {"created": 5, "data": [{"url": "test-url1"}, {"b64_json": "e30K", "revised_prompt": "p"}]}
    )
    assert response.created == 5
    assert response.data == [
        ImageResponseDataInner(url="test-url1"),
        ImageResponseDataInner(b64_json="e30K", revised_prompt="p"),
    ]


def test_create_edit_image_with_mask(image_file, mask_file):
    call = create_edit_image(
        ImageEditRequest(
            image=image_file,
            mask=mask_file,
            prompt="There is a turtle in the pool",
            n=3,
            size=CREATE_IMAGE_SIZE_1024X1024,
            response_format=CREATE_IMAGE_RESPONSE_FORMAT_URL,
        )
    )
    assert call.method == "POST"
    assert call.url == "/images/edits"
    assert call.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    parts = _parts(call)
    assert parts["image"][1] == b"image-bytes"
    assert parts["image"][0].endswith("image.png")
    assert parts["mask"][1] == b"mask-bytes"
    assert parts["prompt"][1] == b"There is a turtle in the pool"
    assert parts["n"][1] == b"3"
    assert parts["size"][1] == b"1024x1024"
    assert parts["response_format"][1] == b"url"


def test_create_edit_image_without_mask(image_file):
    call = create_edit_image(ImageEditRequest(image=image_file, prompt="p", n=3))
    parts = _parts(call)
    assert "mask" not in parts
    assert set(parts) == {"image", "prompt", "n", "size", "response_format"}


def test_create_edit_image_skips_mask_in_builder():
    make, created = _factory()
    call = create_edit_image(ImageEditRequest(prompt="p"), make)
    assert call.method == "POST"
    assert call.url == "/images/edits"
    assert ("file", "mask") not in created[0].calls
    assert created[0].calls[0] == ("file", "image")
    assert created[0].calls[-1] == ("close",)


def test_create_vari_image(image_file):
    call = create_vari_image(
        ImageVariRequest(
            image=image_file,
            n=3,
            size=CREATE_IMAGE_SIZE_1024X1024,
            response_format=CREATE_IMAGE_RESPONSE_FORMAT_URL,
        )
    )
    assert call.url == "/images/variations"
    parts = _parts(call)
    assert parts["image"][1] == b"image-bytes"
    assert parts["n"][1] == b"3"
    assert "prompt" not in parts


def test_edit_image_needs_file_name():
    with pytest.raises(ValueError, match="filename cannot be empty"):
        create_edit_image(ImageEditRequest(image=io.BytesIO(b"data")))


@pytest.mark.parametrize(
    "options",
    [
        {"fail_file": "*"},
        {"fail_file": "mask"},
        {"fail_field": "prompt"},
        {"fail_field": "n"},
        {"fail_field": "size"},
        {"fail_field": "response_format"},
        {"fail_close": True},
    ],
)
def test_edit_image_form_builder_failures(options):
    make, _ = _factory(**options)
    with pytest.raises(MockFailure):
        create_edit_image(ImageEditRequest(mask=object()), make)


@pytest.mark.parametrize(
    "options",
    [
        {"fail_file": "*"},
        {"fail_field": "n"},
        {"fail_field": "size"},
        {"fail_field": "response_format"},
        {"fail_close": True},
    ],
)
def test_vari_image_form_builder_failures(options):
    make, _ = _factory(**options)
    with pytest.raises(MockFailure):
        create_vari_image(ImageVariRequest(), make)


def test_vari_image_field_order():
    make, created = _factory()
    call = create_vari_image(ImageVariRequest(n=2, size="s", response_format="url"), make)
    assert call.method == "POST"
    assert call.url == "/images/variations"
    assert created[0].calls == [
        ("file", "image"),
        ("field", "n", "2"),
        ("field", "size", "s"),
        ("field", "response_format", "url"),
        ("close",),
    ]