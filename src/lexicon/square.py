"""Word-square utilities: columns, rendering and verification."""

from collections import Counter
from typing import Iterable, List, Sequence

from .models import ValidationError, ValidationResult
from .trie import PrefixDictionary


def column_words(rows: Sequence[str]) -> List[str]:
    """
    Read the columns of a square top to bottom.

    Raises ValueError if any row's length differs from the number of rows;
    a ragged square here means bad input filtering upstream.
    """
    size = len(rows)
    for i, row in enumerate(rows):
        if len(row) != size:
            raise ValueError(
                f"Row {i} ('{row}') has length {len(row)}, expected {size} for a {size}x{size} square"
            )
    return [''.join(row[c] for row in rows) for c in range(size)]


def render_square(rows: Sequence[str]) -> str:
    """Render the square as uppercase lines."""
    return '\n'.join(row.upper() for row in rows)


def same_letters(letters: Iterable[str], rows: Sequence[str]) -> bool:
    """True if ``letters`` is exactly the multiset of letters in ``rows``."""
    return Counter(''.join(letters).lower()) == Counter(''.join(rows).lower())


def verify_square(rows: Sequence[str], dictionary: PrefixDictionary) -> ValidationResult:
    """
    Check that every row and every column of a square is a dictionary word.

    Returns a ValidationResult with:
    - valid: True if the square passes all checks
    - errors: EMPTY_SQUARE, NOT_SQUARE, INVALID_ROW or INVALID_COLUMN entries
    - rows / columns: the words read in each direction
    - grid: rendered square (if it is square)
    """
    rows = [row.lower() for row in rows]

    if not rows:
        return ValidationResult(
            valid=False,
            errors=[ValidationError(code="EMPTY_SQUARE", message="Square has no rows")]
        )

    size = len(rows)
    ragged = [i for i, row in enumerate(rows) if len(row) != size]
    if ragged:
        return ValidationResult(
            valid=False,
            errors=[
                ValidationError(
                    code="NOT_SQUARE",
                    message=f"Row {i} ('{rows[i]}') has length {len(rows[i])}, expected {size}",
                    word=rows[i],
                    index=i
                )
                for i in ragged
            ],
            rows=rows
        )

    columns = column_words(rows)
    errors: List[ValidationError] = []

    for i, row in enumerate(rows):
        if not dictionary.contains(row):
            errors.append(ValidationError(
                code="INVALID_ROW",
                message=f"Row {i} '{row}' is not a valid dictionary word",
                word=row,
                index=i
            ))

    for i, column in enumerate(columns):
        if not dictionary.contains(column):
            errors.append(ValidationError(
                code="INVALID_COLUMN",
                message=f"Column {i} '{column}' is not a valid dictionary word",
                word=column,
                index=i
            ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        rows=rows,
        columns=columns,
        grid=render_square(rows),
    )
