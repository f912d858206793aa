"""Data providers for quizzes and candidates."""

from .base import CandidateCatalog, ProviderError, QuizDataProvider
from .file_provider import FileCandidateCatalog, FileQuizProvider
from .http_provider import HttpCandidateCatalog, HttpQuizProvider

__all__ = [
    "CandidateCatalog",
    "FileCandidateCatalog",
    "FileQuizProvider",
    "HttpCandidateCatalog",
    "HttpQuizProvider",
    "ProviderError",
    "QuizDataProvider",
]
