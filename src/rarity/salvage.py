from __future__ import annotations

import json
import logging
from typing import Any


logger = logging.getLogger(__name__)


class UnparsableResponse(ValueError):
    """Oracle text with no recoverable JSON object in it."""

    def __init__(self, raw: Any, message: str = "No JSON object found in classification response") -> None:
        super().__init__(message)
        self.raw = raw


def _loads_object(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def salvage_parse(raw: Any) -> dict[str, Any]:
    """Pull a JSON object out of free-form oracle text.

    Tries the whole payload first, then the span from the first ``{`` to the
    last ``}``. Raises :class:`UnparsableResponse` when neither yields an object.
    """
    if isinstance(raw, (bytes, bytearray)):
        text = raw.decode("utf-8", errors="replace")
    elif isinstance(raw, str):
        text = raw
    else:
        raise UnparsableResponse(raw, "Classification response is not text")

    parsed = _loads_object(text)
    if parsed is not None:
        return parsed

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or start >= end:
        logger.debug("No brace-delimited payload in %d chars of oracle text", len(text))
        raise UnparsableResponse(raw)

    parsed = _loads_object(text[start : end + 1])
    if parsed is None:
        logger.debug("Brace-delimited payload at [%d:%d] is not valid JSON", start, end + 1)
        raise UnparsableResponse(raw)

    logger.debug("Recovered JSON object from noisy oracle text (%d chars dropped)", len(text) - (end + 1 - start))
    return parsed
