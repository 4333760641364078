"""Public decode entry points (parsed value, JSON text, file)."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pasthisto.domain.model import PastTenseHistogram

from .decoder import DecodeOptions, HistogramDecoder
from .errors import MalformedJson

__all__ = ["decode", "decode_json", "load"]

logger = logging.getLogger(__name__)


def decode(document: Any, options: DecodeOptions | None = None) -> PastTenseHistogram:
    """Decode an already parsed Histogrammar document (a ``dict``).

    Raises
    ------
    DecodeError
        On the first problem found; no partial tree is returned.
    """
    return HistogramDecoder(options).decode(document)


def decode_json(text: str | bytes | bytearray, options: DecodeOptions | None = None) -> PastTenseHistogram:
    """Parse JSON text and decode it."""
    try:
        document = json.loads(text)
    except ValueError as e:
        # JSONDecodeError, UnicodeDecodeError and the int digit-limit error
        raise MalformedJson(f"not a JSON document: {e}") from e
    return decode(document, options)


def load(path: str | Path, options: DecodeOptions | None = None) -> PastTenseHistogram:
    """Read and decode a Histogrammar JSON file.

    ``OSError`` from reading the file propagates unchanged.
    """
    p = Path(path)
    logger.debug("[load] reading %s", p)
    return decode_json(p.read_bytes(), options)
