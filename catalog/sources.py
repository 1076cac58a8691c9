"""
Reading dataset text from local files or HTTP(S) URLs, and splitting
newline-delimited JSON into records.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Union

import requests
from loguru import logger

from .errors import FetchError, ParseError


def is_url(source: str) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def fetch_text(source: Union[str, Path], timeout: float = 30.0) -> str:
    """
    Returns the full text of `source`, decoded as UTF-8.
    Raises FetchError on any I/O, network or HTTP status failure.
    """
    source = str(source)
    if is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(source, str(exc)) from exc
        response.encoding = "utf-8"
        return response.text

    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FetchError(source, str(exc)) from exc


def parse_ndjson(text: str, source: str = "<text>", strict: bool = True) -> List[Dict[str, Any]]:
    """
    Parses one JSON object per non-blank line, keeping line order.

    In strict mode the first malformed line aborts the whole parse with a
    ParseError; otherwise it is logged and skipped.
    """
    records: List[Dict[str, Any]] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            record = json.loads(line)
            if not isinstance(record, dict):
                raise ValueError(f"expected a JSON object, got {type(record).__name__}")
        except ValueError as exc:
            message = f"{source}:{lineno}: {exc}"
            if strict:
                raise ParseError(message) from exc
            logger.warning("Skipping malformed line {}", message)
            continue
        records.append(record)
    return records
