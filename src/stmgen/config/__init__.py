"""Configuration parsing modules for stmgen."""

from .answers import AnswersFile, AnswersFileError

__all__ = [
    "AnswersFile",
    "AnswersFileError",
]
