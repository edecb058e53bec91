"""Subject-id index over allow-listed check events."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from tsrank.analysis.traces.trace_parser import TraceEvent
from tsrank.core.config import STRUCTURED_TYPE_CHECK

logger = logging.getLogger(__name__)

DEFAULT_CHECK_NAMES = (STRUCTURED_TYPE_CHECK,)
DEFAULT_CHECK_CATEGORIES = ("check", "checkTypes")


class CheckIndex:
    """Maps a check's subject id to the last matching event seen in trace order."""

    def __init__(self) -> None:
        self._by_subject: dict[int, TraceEvent] = {}
        self.check_count = 0

    def add(self, event: TraceEvent) -> None:
        self.check_count += 1
        subject_id = event.source_id
        if subject_id is None:
            return
        self._by_subject[subject_id] = event

    def get(self, subject_id: int) -> Optional[TraceEvent]:
        return self._by_subject.get(subject_id)

    def __contains__(self, subject_id: object) -> bool:
        return subject_id in self._by_subject

    def __len__(self) -> int:
        return len(self._by_subject)

    def __iter__(self) -> Iterator[int]:
        return iter(self._by_subject)


def is_check_event(
    event: TraceEvent,
    check_names: Iterable[str] = DEFAULT_CHECK_NAMES,
    check_categories: Iterable[str] = DEFAULT_CHECK_CATEGORIES,
) -> bool:
    return event.cat in check_categories and event.name in check_names


def build_check_index(
    trace: Iterable[TraceEvent],
    check_names: Iterable[str] = DEFAULT_CHECK_NAMES,
    check_categories: Iterable[str] = DEFAULT_CHECK_CATEGORIES,
) -> CheckIndex:
    names = frozenset(check_names)
    categories = frozenset(check_categories)
    index = CheckIndex()
    for event in trace:
        if is_check_event(event, names, categories):
            index.add(event)
    if index.check_count != len(index):
        # duplicate subject ids (last one wins) or checks without a subject
        logger.debug(
            "Check index dropped entries: checks=%d subjects=%d",
            index.check_count,
            len(index),
        )
    logger.info("Indexed check events: checks=%d subjects=%d", index.check_count, len(index))
    return index
