"""Request builders, data models and stream decoding for a GPT-style HTTP API."""

__version__ = "0.1.0"

__all__ = [
    "encoding",
    "error_accumulator",
    "fine_tunes",
    "fine_tuning_job",
    "form_builder",
    "image",
    "jsonschema",
    "models",
    "moderation",
    "ratelimit",
    "request_builder",
    "run",
    "stream_reader",
    "thread",
]