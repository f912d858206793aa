"""Network and deployment configuration for the BallotQuiz server."""

import os
from pathlib import Path

DEFAULT_HOST: str = os.environ.get("BALLOT_QUIZ_HOST", "127.0.0.1")
DEFAULT_PORT: int = int(os.environ.get("BALLOT_QUIZ_PORT", "8000"))

# Remote backend owning the quiz and question endpoints. Empty means local files.
BACKEND_URL: str = os.environ.get("BALLOT_QUIZ_BACKEND_URL", "")
CANDIDATES_URL: str = os.environ.get("BALLOT_QUIZ_CANDIDATES_URL", "")
REQUEST_TIMEOUT_SECONDS: float = 10.0

DATA_DIR: Path = Path(
    os.environ.get("BALLOT_QUIZ_DATA_DIR", Path(__file__).resolve().parent.parent / "data")
)
QUIZ_DIR_NAME: str = "quizzes"
CANDIDATES_FILE_NAME: str = "candidates.json"

SHUFFLE_QUESTIONS: bool = os.environ.get("BALLOT_QUIZ_SHUFFLE_QUESTIONS", "0") == "1"
SHUFFLE_OPTIONS: bool = os.environ.get("BALLOT_QUIZ_SHUFFLE_OPTIONS", "0") == "1"
_seed = os.environ.get("BALLOT_QUIZ_SHUFFLE_SEED", "")
SHUFFLE_SEED: int | None = int(_seed) if _seed else None
