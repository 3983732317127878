"""Builds multipart/form-data request bodies."""

from __future__ import annotations

import secrets
import shutil
from typing import Any, BinaryIO


def _escape_quotes(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _path_base(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


class FormBuilder:
    """Writes form fields and files as multipart parts into a binary stream."""

    def __init__(self, body: BinaryIO) -> None:
        self._body = body
        self._boundary = secrets.token_hex(30)
        self._started = False

    @property
    def boundary(self) -> str:
        return self._boundary

    def _begin_part(self, headers: dict[str, str]) -> None:
        prefix = "\r\n--" if self._started else "--"
        lines = [f"{prefix}{self._boundary}\r\n"]
        lines.extend(f"{key}: {headers[key]}\r\n" for key in sorted(headers))
        lines.append("\r\n")
        self._body.write("".join(lines).encode("utf-8"))
        self._started = True

    def create_form_file(self, fieldname: str, file: Any) -> None:
        """Add an open file as a part, named after the file's name."""
        self._create_form_file(fieldname, file, str(getattr(file, "name", "")))

    def create_form_file_reader(self, fieldname: str, reader: Any, filename: str) -> None:
        """Add the content of a reader as a part named after the base of ``filename``."""
        self._create_form_file(fieldname, reader, _path_base(filename))

    def _create_form_file(self, fieldname: str, reader: Any, filename: str) -> None:
        if not filename:
            raise ValueError("filename cannot be empty")
        self._begin_part(
            {
                "Content-Disposition": (
                    f'form-data; name="{_escape_quotes(fieldname)}"; '
                    f'filename="{_escape_quotes(filename)}"'
                ),
                "Content-Type": "application/octet-stream",
            }
        )
        shutil.copyfileobj(reader, self._body)

    def write_field(self, fieldname: str, value: str) -> None:
        self._begin_part({"Content-Disposition": f'form-data; name="{_escape_quotes(fieldname)}"'})
        self._body.write(value.encode("utf-8"))

    def close(self) -> None:
        self._body.write(f"\r\n--{self._boundary}--\r\n".encode("utf-8"))

    def form_data_content_type(self) -> str:
        return f"multipart/form-data; boundary={self._boundary}"