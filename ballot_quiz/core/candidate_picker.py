"""Senatorial candidate picker with a bounded selection."""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Iterator, Mapping

from PySide6.QtCore import QObject, Signal, Slot

from ballot_quiz.constants.picker_constants import (
    CAPACITY_EXCEEDED_TEMPLATE,
    COLUMN_BREAKPOINTS,
    DEFAULT_CANDIDATE_COMMENTS,
    DEFAULT_COLUMN_SIZE,
    EXPORT_FILE_NAME,
    SELECTION_CAPACITY,
)
from ballot_quiz.core.candidate_exporter import render_selection, save_selection_to_file
from ballot_quiz.core.models import Candidate, CandidateView, PickerSnapshot
from ballot_quiz.core.services.selection_set import SelectionCapacityError, SelectionSet
from ballot_quiz.core.viewport import ViewportObserver
from ballot_quiz.providers.base import CandidateCatalog, ProviderError

log = logging.getLogger(__name__)


class UnknownCandidateError(KeyError):
    """Raised when a ballot number is not part of the loaded catalog."""


def column_size_for_width(
    width: int,
    breakpoints: tuple[tuple[int, int], ...] = COLUMN_BREAKPOINTS,
    default: int = DEFAULT_COLUMN_SIZE,
) -> int:
    for max_width, size in breakpoints:
        if width <= max_width:
            return size
    return default


class CandidatePicker(QObject):
    """Checkbox list of candidates where at most ``capacity`` can be ticked."""

    selection_changed = Signal(object)
    capacity_exceeded = Signal(str)

    def __init__(
        self,
        catalog: CandidateCatalog,
        *,
        capacity: int = SELECTION_CAPACITY,
        comments: Mapping[int, str] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._catalog = catalog
        self._selection = SelectionSet(capacity)
        self._comment_table: Mapping[int, str] = (
            DEFAULT_CANDIDATE_COMMENTS if comments is None else comments
        )
        self._candidates: list[Candidate] = []
        self._comments: dict[int, str] = {}
        self._column_size: int = DEFAULT_COLUMN_SIZE
        self._viewport: ViewportObserver | None = None
        self._error: str | None = None

    # --- Loading ---

    def load(self) -> asyncio.Future:
        """Fetch the candidate catalog in the background."""
        return asyncio.ensure_future(self._fetch_candidates())

    async def _fetch_candidates(self) -> None:
        try:
            candidates = await self._catalog.get_candidates()
        except ProviderError as exc:
            log.error("Error loading candidates: %s", exc)
            self._error = str(exc)
        else:
            self._candidates = list(candidates)
            self._error = None
            log.info("Loaded %d candidate(s)", len(self._candidates))
        self._publish()

    # --- Selection ---

    def toggle(self, ballot_number: int, want_selected: bool) -> bool:
        """Select or deselect a candidate; returns False when the selection is full."""
        if self._find(ballot_number) is None:
            raise UnknownCandidateError(ballot_number)

        if want_selected:
            try:
                self._selection.add(ballot_number)
            except SelectionCapacityError as exc:
                message = CAPACITY_EXCEEDED_TEMPLATE.format(capacity=exc.capacity)
                log.info("Rejected candidate %s: %s", ballot_number, message)
                self.capacity_exceeded.emit(message)
                return False
            self._comments[ballot_number] = self._comment_table.get(ballot_number, "")
        else:
            self._selection.discard(ballot_number)
            self._comments[ballot_number] = ""

        self._publish()
        return True

    def is_selected(self, ballot_number: int) -> bool:
        return ballot_number in self._selection

    @property
    def capacity(self) -> int:
        return self._selection.capacity

    @property
    def selected_count(self) -> int:
        return len(self._selection)

    @property
    def selected_count_label(self) -> str:
        return "candidate" if self.selected_count == 1 else "candidates"

    # --- Layout ---

    @property
    def column_size(self) -> int:
        return self._column_size

    @Slot(int)
    def set_viewport_width(self, width: int) -> None:
        size = column_size_for_width(width)
        if size != self._column_size:
            self._column_size = size
            self._publish()

    def attach_viewport(self, viewport: ViewportObserver) -> None:
        self.detach_viewport()
        self._viewport = viewport
        viewport.width_changed.connect(self.set_viewport_width)
        self.set_viewport_width(viewport.width)

    def detach_viewport(self) -> None:
        if self._viewport is not None:
            self._viewport.width_changed.disconnect(self.set_viewport_width)
            self._viewport = None

    @contextmanager
    def observe_viewport(self, viewport: ViewportObserver) -> Iterator[CandidatePicker]:
        """Follow ``viewport`` for the duration of the block."""
        self.attach_viewport(viewport)
        try:
            yield self
        finally:
            self.detach_viewport()

    def sorted_candidates(self) -> list[CandidateView]:
        return [
            CandidateView(
                candidate=candidate,
                comment=self._comments.get(candidate.ballot_number, ""),
                checked=candidate.ballot_number in self._selection,
            )
            for candidate in sorted(self._candidates, key=lambda c: c.ballot_number)
        ]

    def columns(self, width: int | None = None) -> list[list[CandidateView]]:
        """Split the ballot-ordered candidates into fixed-size columns."""
        size = self._column_size if width is None else column_size_for_width(width)
        rows = self.sorted_candidates()
        return [rows[i:i + size] for i in range(0, len(rows), size)]

    # --- Export ---

    def selected_candidates(self) -> list[Candidate]:
        return [c for c in self._candidates if c.ballot_number in self._selection]

    def export_selection(self) -> str:
        return render_selection(self.selected_candidates())

    def save_selection(self, target: Path) -> Path:
        """Write the export to ``target``; a directory gets the default file name."""
        if target.is_dir():
            target = target / EXPORT_FILE_NAME
        return save_selection_to_file(target, self.selected_candidates())

    # --- Snapshots ---

    @property
    def error(self) -> str | None:
        return self._error

    def snapshot(self) -> PickerSnapshot:
        return PickerSnapshot(
            candidates=tuple(self.sorted_candidates()),
            selected=self._selection.snapshot(),
            column_size=self._column_size,
            error=self._error,
        )

    def _find(self, ballot_number: int) -> Candidate | None:
        return next((c for c in self._candidates if c.ballot_number == ballot_number), None)

    def _publish(self) -> None:
        self.selection_changed.emit(self.snapshot())
