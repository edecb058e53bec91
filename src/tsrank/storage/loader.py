"""Concurrent JSON loading for the trace and types files.

Both files are read off the event loop and awaited together; nothing else in
the tool suspends.  A file that is missing, unreadable, not JSON, or not a JSON
array degrades to an empty input and is reported back as a warning instead of
aborting the report.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

from tsrank.core.errors import InputLoadError

logger = logging.getLogger(__name__)


@dataclass
class LoadedInputs:
    trace: List[Any] = field(default_factory=list)
    types: List[Any] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def read_json_array(path: Path) -> List[Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputLoadError(f"cannot read {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise InputLoadError(f"{path} is not valid UTF-8: {exc}") from exc
    try:
        data = json.loads(text) if text.strip() else None
    except json.JSONDecodeError as exc:
        raise InputLoadError(f"invalid JSON in {path}: {exc}") from exc
    if data is None:
        raise InputLoadError(f"{path} is empty")
    if not isinstance(data, list):
        raise InputLoadError(f"{path} must contain a JSON array, got {type(data).__name__}")
    return data


async def read_json_file(path: Path) -> List[Any]:
    return await asyncio.to_thread(read_json_array, Path(path))


async def load_inputs(trace_path: Path, types_path: Path) -> LoadedInputs:
    started = time.perf_counter()
    results = await asyncio.gather(
        read_json_file(trace_path),
        read_json_file(types_path),
        return_exceptions=True,
    )
    loaded = LoadedInputs()
    for label, result in zip(("trace", "types"), results):
        if isinstance(result, InputLoadError):
            message = f"{label} file treated as empty: {result}"
            logger.warning(message)
            loaded.warnings.append(message)
            continue
        if isinstance(result, BaseException):
            raise result
        setattr(loaded, label, result)
    logger.info(
        "Read input files: traces=%d types=%d elapsed=%.3fs",
        len(loaded.trace),
        len(loaded.types),
        time.perf_counter() - started,
    )
    return loaded


def load_inputs_sync(trace_path: Path, types_path: Path) -> LoadedInputs:
    return asyncio.run(load_inputs(trace_path, types_path))
