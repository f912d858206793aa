"""Plain-text rendering of a candidate selection."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ballot_quiz.core.models import Candidate


def render_selection(candidates: Iterable[Candidate]) -> str:
    """One ``"<ballot number>. <name> (<party>)"`` line per candidate, by ballot number."""
    ordered = sorted(candidates, key=lambda candidate: candidate.ballot_number)
    return "\n".join(candidate.label for candidate in ordered)


def save_selection_to_file(file_path: Path, candidates: Iterable[Candidate]) -> Path:
    """Write the rendered selection as UTF-8 text and return the resolved path."""
    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(render_selection(candidates), encoding="utf-8")
    return file_path
