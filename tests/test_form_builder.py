import io
from email import policy
from email.parser import BytesParser

import pytest

from gptkit.form_builder import FormBuilder


class MockWriterFailed(Exception):
    pass


class FailingWriter:
    def write(self, data):
        raise MockWriterFailed("mock writer failed")


def _parse(builder, body):
    raw = (
        b"Content-Type: " + builder.form_data_content_type().encode() + b"\r\n\r\n" + body.getvalue()
    )
    return list(BytesParser(policy=policy.default).parsebytes(raw).iter_parts())


def test_failing_writer(tmp_path):
    path = tmp_path / "upload.bin"
    path.write_bytes(b"hello")
    builder = FormBuilder(FailingWriter())
    with path.open("rb") as file, pytest.raises(MockWriterFailed):
        builder.create_form_file("file", file)


def test_closed_file(tmp_path):
    path = tmp_path / "upload.bin"
    path.write_bytes(b"hello")
    file = path.open("rb")
    file.close()
    builder = FormBuilder(io.BytesIO())
    with pytest.raises(ValueError):
        builder.create_form_file("file", file)


def test_single_field_wire_format():
    body = io.BytesIO()
    builder = FormBuilder(body)
    builder.write_field("n", "3")
    builder.close()
    b = builder.boundary
    expected = f'--{b}\r\nContent-Disposition: form-data; name="n"\r\n\r\n3\r\n--{b}--\r\n'
    assert body.getvalue() == expected.encode()


def test_content_type_names_boundary():
    builder = FormBuilder(io.BytesIO())
    assert builder.form_data_content_type() == "multipart/form-data; boundary=" + builder.boundary


def test_round_trip_file_reader_and_field():
    body = io.BytesIO()
    builder = FormBuilder(body)
    builder.create_form_file_reader("file", io.BytesIO(b"some webm data"), "dir/fake.webm")
    builder.write_field("prompt", "hello")
    builder.close()
    parts = _parse(builder, body)
    assert len(parts) == 2
    assert parts[0].get_param("name", header="content-disposition") == "file"
    assert parts[0].get_filename() == "fake.webm"
    assert parts[0].get_payload(decode=True) == b"some webm data"
    assert parts[1].get_param("name", header="content-disposition") == "prompt"
    assert parts[1].get_payload(decode=True) == b"hello"


def test_create_form_file_uses_file_name(tmp_path):
    path = tmp_path / "image.png"
    path.write_bytes(b"pixels")
    body = io.BytesIO()
    builder = FormBuilder(body)
    with path.open("rb") as file:
        builder.create_form_file("image", file)
    builder.close()
    parts = _parse(builder, body)
    assert parts[0].get_payload(decode=True) == b"pixels"
    assert parts[0].get_filename() == str(path)


def test_empty_file_name_rejected():
    class Nameless(io.BytesIO):
        name = ""

    builder = FormBuilder(io.BytesIO())
    with pytest.raises(ValueError, match="filename cannot be empty"):
        builder.create_form_file("file", Nameless(b"x"))