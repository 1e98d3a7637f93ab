"""
Pydantic models for the generation engine.

This module contains the configuration, the generated puzzle and session
types, and the issue/report values the generator records while it works.
The search logic itself lives in builder.py, uniqueness.py and generator.py.
"""

from collections import Counter
from typing import List, Optional, Literal, Sequence
from pydantic import BaseModel, Field, model_validator


# Type aliases
IssueCode = Literal[
    "EMPTY_DICTIONARY",
    "EXHAUSTED_SEARCH",
    "SEARCH_BUDGET_EXCEEDED",
    "NON_UNIQUE_SOLUTION",
    "RETRIES_EXHAUSTED",
]
Outcome = Literal["PENDING", "SUCCESS", "EMPTY_DICTIONARY", "EXHAUSTED_SEARCH", "RETRIES_EXHAUSTED"]

# A candidate board: one sequence of cells per row, None for an empty cell
Board = Sequence[Sequence[Optional[str]]]


class GeneratorConfig(BaseModel):
    """Configuration for puzzle generation."""
    version: str = "TETRAD_v1"
    size: int = Field(default=4, ge=2, le=8)
    max_retries: int = Field(default=50, ge=1)
    max_search_steps: int = Field(default=200_000, ge=1)
    uniqueness_cap: int = Field(default=2, ge=2)
    max_uniqueness_steps: int = Field(default=500_000, ge=1)
    level_attempts: int = Field(default=120, ge=1)
    fallback_text: str = Field(default="tetradwordpuzzlega", min_length=1, pattern=r'^[a-z]+$')
    dictionary_path: Optional[str] = None

    def fallback_bag(self, size: Optional[int] = None) -> str:
        """Fixed bag used when no puzzle could be generated."""
        n = (size or self.size) ** 2
        repeats = n // len(self.fallback_text) + 1
        return (self.fallback_text * repeats)[:n]


class GeneratedPuzzle(BaseModel):
    """
    A generated square: shuffled letters plus the row solution.

    The solution is only kept in memory for answer checking; callers
    persist the identity (day key + bag), never the rows.
    """
    letters: List[str] = Field(..., min_length=1)
    solution: List[str] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_consistency(self) -> "GeneratedPuzzle":
        size = len(self.solution)
        if any(len(row) != size for row in self.solution):
            raise ValueError(f"Solution rows must all have length {size}")
        if any(len(letter) != 1 for letter in self.letters):
            raise ValueError("Letters must be single characters")
        if Counter(self.letters) != Counter(''.join(self.solution)):
            raise ValueError("Letters must be a permutation of the solution's letters")
        return self

    @property
    def size(self) -> int:
        return len(self.solution)

    @property
    def bag(self) -> str:
        """The letters as presented to the player."""
        return ''.join(self.letters)

    @property
    def columns(self) -> List[str]:
        return [''.join(row[c] for row in self.solution) for c in range(self.size)]

    def solution_letter(self, row: int, col: int) -> str:
        """Letter the solution holds at (row, col)."""
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} square")
        return self.solution[row][col]

    def matches(self, board: Board, row: int, col: int) -> bool:
        """Does the candidate board hold the solution's letter at (row, col)?"""
        letter = board[row][col]
        if not letter:
            return False
        return letter.lower() == self.solution_letter(row, col)

    def is_solved(self, board: Board) -> bool:
        """True if every cell of the board matches the solution."""
        if len(board) != self.size or any(len(row) != self.size for row in board):
            return False
        return all(
            self.matches(board, r, c)
            for r in range(self.size)
            for c in range(self.size)
        )


class PuzzleIdentity(BaseModel):
    """A day (or level) key paired with the bag shown for it."""
    day_key: str
    bag: str = Field(..., min_length=1)


class PuzzleSession(BaseModel):
    """
    Everything the game layer needs to start a run.

    A session without a puzzle is a fallback: the bag is fixed and there
    is no known solution, so solve checks and hints must be disabled.
    """
    identity: PuzzleIdentity
    puzzle: Optional[GeneratedPuzzle] = None
    themed_word: Optional[str] = None
    themed_index: Optional[int] = Field(None, ge=0)

    @property
    def is_fallback(self) -> bool:
        return self.puzzle is None

    @property
    def solution(self) -> Optional[List[str]]:
        return self.puzzle.solution if self.puzzle else None


class GenerationIssue(BaseModel):
    """A single non-fatal generation failure."""
    code: IssueCode
    message: str
    attempt: int = Field(0, ge=0)  # 0 when raised before any attempt


class GenerationReport(BaseModel):
    """What happened during one call to PuzzleGenerator.generate."""
    size: int
    max_retries: int
    attempts: int = 0
    outcome: Outcome = "PENDING"
    issues: List[GenerationIssue] = Field(default_factory=list)
    search_steps: int = 0
    uniqueness_steps: int = 0

    @property
    def succeeded(self) -> bool:
        return self.outcome == "SUCCESS"
