"""Word storage and square verification for the puzzle engine."""

from .trie import PrefixDictionary, ROOT
from .models import ValidationError, ValidationResult
from .square import column_words, render_square, same_letters, verify_square
from .loader import FALLBACK_FOUR_LETTER_WORDS, normalize_words, load_words, load_world_dictionary

__all__ = [
    # Dictionary
    "PrefixDictionary",
    "ROOT",
    # Models
    "ValidationError",
    "ValidationResult",
    # Square utilities
    "column_words",
    "render_square",
    "same_letters",
    "verify_square",
    # Loading
    "FALLBACK_FOUR_LETTER_WORDS",
    "normalize_words",
    "load_words",
    "load_world_dictionary",
]
