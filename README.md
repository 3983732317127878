# gptkit

gptkit describes the requests and responses of a GPT-style HTTP API as plain
Python dataclasses, prepares the calls its endpoints expect, and decodes
streamed server-sent-event replies. It uses only the standard library.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install .[test]
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `gptkit.encoding` | `JSONMarshaller` (compact, HTML-safe JSON bytes), `JSONUnmarshaler`, and `to_jsonable` for turning dataclasses, enums and mappings into JSON-ready values |
| `gptkit.error_accumulator` | `ErrorAccumulator`, which collects the error body of a stream; a failed write raises `ErrorAccumulatorWriteError` |
| `gptkit.form_builder` | `FormBuilder`, which writes `multipart/form-data` bodies with file parts and text fields |
| `gptkit.request_builder` | `RequestBuilder`, which turns a method, URL, body and headers into an `ApiCall`, and `encode_query` for query strings |
| `gptkit.jsonschema` | `Definition` and `DataType` for describing function parameters as JSON Schema |
| `gptkit.ratelimit` | `RateLimitHeaders`, read from the `x-ratelimit-*` response headers, `ResetTime` and `parse_duration` |
| `gptkit.stream_reader` | `StreamReader`, which reads `data:` lines of an event stream and stops at `[DONE]` |
| `gptkit.models` | model listing, lookup and deletion of fine-tuned models |
| `gptkit.moderation` | moderation requests and results |
| `gptkit.thread` | assistant threads |
| `gptkit.run` | runs and run steps, with `Pagination` for list calls |
| `gptkit.fine_tunes` | the older fine-tunes endpoints |
| `gptkit.fine_tuning_job` | fine-tuning jobs and their events |
| `gptkit.image` | image generation, edits and variations |

## Preparing calls

Each endpoint function returns an `ApiCall` with the method, a URL path
relative to the API's base, the encoded body and any extra headers:

```python
from gptkit import models, run

call = models.get_model("my-model")
# ApiCall(method="GET", url="/models/my-model", body=None, headers={})

call = run.list_runs("thread_1", run.Pagination(limit=20, order="desc"))
# call.url == "/threads/thread_1/runs?limit=20&order=desc"
# call.headers == {"OpenAI-Beta": "assistants=v1"}
```

Response dataclasses are built from decoded JSON with their `from_dict`
class methods, for example `models.ModelsList.from_dict(data)`.

Image edits and variations are sent as multipart forms; `create_edit_image`
and `create_vari_image` take open binary files and an optional
`form_builder_factory`.

## JSON Schema definitions

A `Definition` always writes a `properties` object, even when it is empty:

```python
from gptkit.jsonschema import Definition

print(Definition().to_json())   # {"properties":{}}
```

Nested definitions in `properties` and `items` are written the same way.

## Streams

`StreamReader` reads lines from any object with a `readline()` method that
returns bytes:

```python
import io
from gptkit.stream_reader import StreamReader

reader = StreamReader(io.BytesIO(b'data: {"a":1}\n\ndata: [DONE]\n'))
print(list(reader))   # [{'a': 1}]
```

`recv()` returns the next decoded message, passed through the optional
`decode` callable. It raises `EOFError` once the server sends `data: [DONE]`
or the stream ends, `TooManyEmptyStreamMessagesError` when more lines than
`empty_messages_limit` (300 by default) carry no data, and `StreamAPIError`
when the server sends an error object instead of events. Iterating a
`StreamReader` stops at the end of the stream; it can be closed with
`close()` or used as a context manager.

## Rate limits

`RateLimitHeaders.from_headers(headers)` reads the `x-ratelimit-*` headers;
missing or malformed numbers become 0. `ResetTime.time(now)` adds the reset
interval (such as `"6m0s"`) to `now`, or to the current time when `now` is
omitted; `parse_duration` parses such intervals into a `timedelta`.

## Errors

Failures are raised as exceptions. A moderation request naming a model other
than `text-moderation-stable` or `text-moderation-latest` raises
`ModerationInvalidModelError` before any call is prepared.

## What gptkit does not do

gptkit does not send anything over the network. It has no HTTP client, no
base URL or authentication handling and no command-line tool: the `ApiCall`
values it prepares are to be sent with an HTTP library of your choice, and
the replies decoded with the response classes' `from_dict` methods. It does
not cover chat, completion, embedding, file or audio endpoints.