"""Reads server-sent event streams line by line into decoded responses."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from .encoding import JSONUnmarshaler
from .error_accumulator import ErrorAccumulator

T = TypeVar("T")

_HEADER_DATA = b"data: "
_ERROR_PREFIX = b'data: {"error":'
_DONE = b"[DONE]"

DEFAULT_EMPTY_MESSAGES_LIMIT = 300


class TooManyEmptyStreamMessagesError(Exception):
    """Raised when a stream sends more non-data lines than allowed."""

    def __init__(self, message: str = "stream has sent too many empty messages") -> None:
        super().__init__(message)


class StreamAPIError(Exception):
    """An error object sent by the server in place of stream data."""

    def __init__(
        self,
        message: str = "",
        type: str = "",
        param: Any = None,
        code: Any = None,
    ) -> None:
        super().__init__(f"error, {message}")
        self.message = message
        self.type = type
        self.param = param
        self.code = code

    @classmethod
    def from_dict(cls, data: Any) -> StreamAPIError:
        body = data.get("error") if isinstance(data, dict) else None
        if not isinstance(body, dict):
            return cls()
        return cls(
            message=str(body.get("message") or ""),
            type=str(body.get("type") or ""),
            param=body.get("param"),
            code=body.get("code"),
        )


class StreamReader(Generic[T]):
    """Turns ``data:`` lines of an event stream into decoded values.

    ``recv`` raises ``EOFError`` once the stream ends or sends ``[DONE]``.
    """

    def __init__(
        self,
        reader: Any,
        decode: Callable[[Any], T] | None = None,
        empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT,
        error_accumulator: ErrorAccumulator | None = None,
        unmarshaler: Any = None,
        response: Any = None,
    ) -> None:
        self._reader = reader
        self._decode: Callable[[Any], Any] = decode if decode is not None else (lambda data: data)
        self._empty_messages_limit = empty_messages_limit
        self._errors = error_accumulator if error_accumulator is not None else ErrorAccumulator()
        self._unmarshaler = unmarshaler if unmarshaler is not None else JSONUnmarshaler()
        self._response = response
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def recv(self) -> T:
        """Return the next decoded message."""
        if self._finished:
            raise EOFError("stream finished")
        return self._process_lines()

    def _read_line(self) -> tuple[bytes, BaseException | None]:
        try:
            raw = self._reader.readline()
        except OSError as exc:
            return b"", exc
        if not raw.endswith(b"\n"):
            return raw, EOFError("end of stream")
        return raw, None

    def _process_lines(self) -> Any:
        empty_messages = 0
        has_error_prefix = False

        while True:
            raw, read_error = self._read_line()
            if read_error is not None or has_error_prefix:
                api_error = self.unmarshal_error()
                if api_error is not None:
                    raise api_error
                if read_error is not None:
                    raise read_error
                # An error line whose body could not be decoded yields an empty result.
                return None

            line = raw.strip()
            if line.startswith(_ERROR_PREFIX):
                has_error_prefix = True
            if not line.startswith(_HEADER_DATA) or has_error_prefix:
                if has_error_prefix:
                    line = line[len(_HEADER_DATA):]
                self._errors.write(line)
                empty_messages += 1
                if empty_messages > self._empty_messages_limit:
                    raise TooManyEmptyStreamMessagesError()
                continue

            payload = line[len(_HEADER_DATA):]
            if payload == _DONE:
                self._finished = True
                raise EOFError("stream finished")

            return self._decode(self._unmarshaler.unmarshal(payload))

    def unmarshal_error(self) -> StreamAPIError | None:
        """Decode the accumulated non-data lines as an error, if they form one."""
        data = self._errors.contents()
        if not data:
            return None
        try:
            parsed = self._unmarshaler.unmarshal(data)
        except Exception:
            return None
        if not isinstance(parsed, dict):
            return None
        return StreamAPIError.from_dict(parsed)

    def close(self) -> None:
        target = self._response if self._response is not None else self._reader
        closer = getattr(target, "close", None)
        if callable(closer):
            closer()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except EOFError:
                return

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()