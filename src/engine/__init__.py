"""Puzzle generation engine for Tetrad."""

from .models import (
    GeneratorConfig,
    GeneratedPuzzle,
    PuzzleIdentity,
    PuzzleSession,
    GenerationIssue,
    GenerationReport,
)
from .rng import DeterministicRandomSource, format_day_key, ZERO_STATE_SUBSTITUTE
from .builder import SquareBuilder
from .uniqueness import UniquenessVerifier
from .generator import PuzzleGenerator

__all__ = [
    "GeneratorConfig",
    "GeneratedPuzzle",
    "PuzzleIdentity",
    "PuzzleSession",
    "GenerationIssue",
    "GenerationReport",
    "DeterministicRandomSource",
    "format_day_key",
    "ZERO_STATE_SUBSTITUTE",
    "SquareBuilder",
    "UniquenessVerifier",
    "PuzzleGenerator",
]
