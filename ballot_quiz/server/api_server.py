"""FastAPI server that exposes the quiz player and candidate picker to a web UI."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
import uvicorn

from ballot_quiz.constants.about import APP_NAME, APP_VERSION
from ballot_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from ballot_quiz.constants.picker_constants import CAPACITY_EXCEEDED_TEMPLATE, EXPORT_FILE_NAME
from ballot_quiz.constants.quiz_constants import (
    FEEDBACK_CORRECT_MESSAGE,
    FEEDBACK_INCORRECT_MESSAGE,
    QUIZ_COMPLETE_MESSAGE,
)
from ballot_quiz.core.candidate_picker import CandidatePicker, UnknownCandidateError
from ballot_quiz.core.models import CandidateView, Feedback, PickerSnapshot, QuizSnapshot
from ballot_quiz.core.prompt_renderer import renderer
from ballot_quiz.core.quiz_player import QuizPlayer

_FEEDBACK_MESSAGES = {
    Feedback.CORRECT: FEEDBACK_CORRECT_MESSAGE,
    Feedback.INCORRECT: FEEDBACK_INCORRECT_MESSAGE,
}


class SelectQuizPayload(BaseModel):
    """Payload schema for choosing a quiz before starting it."""

    quiz_id: str | None = None


class AnswerPayload(BaseModel):
    """Payload schema for ticking or unticking an option."""

    value: str
    selected: bool = True


class TogglePayload(BaseModel):
    """Payload schema for the candidate checkbox."""

    ballot_number: int
    selected: bool


def _quiz_payload(snapshot: QuizSnapshot) -> dict[str, object]:
    question = snapshot.question
    message = None
    if snapshot.is_finished:
        message = QUIZ_COMPLETE_MESSAGE
    return {
        "quizzes": [{"id": quiz.id, "name": quiz.name} for quiz in snapshot.quiz_options],
        "selected_quiz_id": snapshot.selected_quiz_id,
        "quiz_id": snapshot.quiz_id,
        "title": snapshot.title,
        "is_loaded": snapshot.is_loaded,
        "question": None if question is None else {
            "id": question.id,
            "prompt_html": renderer.render_prompt(question.prompt),
            "allow_multiple": question.allow_multiple,
        },
        "position": snapshot.position,
        "question_count": snapshot.question_count,
        "options": [
            {
                "key": option.key,
                "value": option.value,
                "label_html": renderer.render_label(option.label),
                "status": option.status.value,
                "class": option.css_class,
            }
            for option in snapshot.options
        ],
        "selected_answers": sorted(snapshot.selected_answers),
        "submitted": snapshot.submitted,
        "can_submit": snapshot.can_submit,
        "feedback": None if snapshot.feedback is None else snapshot.feedback.value,
        "feedback_message": _FEEDBACK_MESSAGES.get(snapshot.feedback) if snapshot.feedback else None,
        "score": snapshot.score,
        "finished": snapshot.is_finished,
        "message": message,
        "warning": snapshot.warning,
        "error": snapshot.error,
    }


def _candidate_payload(view: CandidateView) -> dict[str, object]:
    return {
        "ballot_number": view.ballot_number,
        "name": view.candidate.name,
        "party": view.candidate.party,
        "label": view.label,
        "comment": view.comment,
        "checked": view.checked,
    }


def _picker_payload(
    snapshot: PickerSnapshot, columns: list[list[CandidateView]]
) -> dict[str, object]:
    return {
        "columns": [[_candidate_payload(view) for view in column] for column in columns],
        "column_size": snapshot.column_size,
        "selected_count": snapshot.selected_count,
        "selected_count_label": snapshot.selected_count_label,
        "error": snapshot.error,
    }


def create_api_app(quiz_player: QuizPlayer, candidate_picker: CandidatePicker) -> FastAPI:
    """Create a FastAPI application wired to the provided widgets."""

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await quiz_player.load_catalog()
        await candidate_picker.load()
        yield

    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION, lifespan=lifespan)

    def get_player() -> QuizPlayer:
        return quiz_player

    def get_picker() -> CandidatePicker:
        return candidate_picker

    @app.get("/quizzes")
    async def list_quizzes(player: QuizPlayer = Depends(get_player)) -> list[dict[str, str]]:
        return [{"id": quiz.id, "name": quiz.name} for quiz in player.quiz_options]

    @app.get("/quiz")
    async def get_quiz(player: QuizPlayer = Depends(get_player)) -> dict[str, object]:
        return _quiz_payload(player.snapshot())

    @app.post("/quiz/select")
    async def select_quiz(
        payload: SelectQuizPayload, player: QuizPlayer = Depends(get_player)
    ) -> dict[str, object]:
        player.select_quiz(payload.quiz_id)
        return _quiz_payload(player.snapshot())

    @app.post("/quiz/start")
    async def start_quiz(player: QuizPlayer = Depends(get_player)) -> dict[str, object]:
        pending = player.start_quiz()
        if pending is not None:
            await pending
        return _quiz_payload(player.snapshot())

    @app.post("/quiz/answer")
    async def set_answer(
        payload: AnswerPayload, player: QuizPlayer = Depends(get_player)
    ) -> dict[str, object]:
        try:
            player.set_answer(payload.value, payload.selected)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _quiz_payload(player.snapshot())

    @app.post("/quiz/submit")
    async def submit_answer(player: QuizPlayer = Depends(get_player)) -> dict[str, object]:
        player.submit()
        return _quiz_payload(player.snapshot())

    @app.post("/quiz/next")
    async def next_question(player: QuizPlayer = Depends(get_player)) -> dict[str, object]:
        player.next_question()
        return _quiz_payload(player.snapshot())

    @app.get("/candidates")
    async def get_candidates(
        width: int | None = Query(default=None, ge=0),
        picker: CandidatePicker = Depends(get_picker),
    ) -> dict[str, object]:
        if width is not None:
            picker.set_viewport_width(width)
        return _picker_payload(picker.snapshot(), picker.columns())

    @app.post("/candidates/toggle")
    async def toggle_candidate(
        payload: TogglePayload, picker: CandidatePicker = Depends(get_picker)
    ) -> dict[str, object]:
        try:
            accepted = picker.toggle(payload.ballot_number, payload.selected)
        except UnknownCandidateError as exc:
            raise HTTPException(
                status_code=404, detail=f"Unknown ballot number {payload.ballot_number}."
            ) from exc
        if not accepted:
            raise HTTPException(
                status_code=409,
                detail=CAPACITY_EXCEEDED_TEMPLATE.format(capacity=picker.capacity),
            )
        return _picker_payload(picker.snapshot(), picker.columns())

    @app.get("/candidates/export", response_class=PlainTextResponse)
    async def export_selection(picker: CandidatePicker = Depends(get_picker)) -> PlainTextResponse:
        return PlainTextResponse(
            picker.export_selection(),
            headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILE_NAME}"'},
        )

    return app


def run_api_server(
    quiz_player: QuizPlayer,
    candidate_picker: CandidatePicker,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the API on the current thread until interrupted."""
    app = create_api_app(quiz_player, candidate_picker)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    uvicorn.Server(config).run()
