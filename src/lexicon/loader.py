"""Word-list loading and normalization."""

from pathlib import Path
from typing import Iterable, List


# Minimal built-in list used when no dictionary file is configured
FALLBACK_FOUR_LETTER_WORDS: List[str] = [
    "star", "tare", "area", "read",
    "lend", "else", "need", "deer",
    "chip", "chop", "inch", "pica",
    "dome", "dove", "mode", "mend",
    "tide", "tile", "time", "tame",
    "rope", "rode", "rose", "nose",
    "east", "ease", "earn", "near",
    "peel", "peal", "pale", "sale",
    "mall", "tall", "ball", "fall",
]


def normalize_words(lines: Iterable[str], length: int = 4) -> List[str]:
    """
    Clean raw word-list lines.

    Strips whitespace, lowercases, and keeps only alphabetic entries of
    exactly ``length`` letters. Duplicates are dropped, keeping the first
    occurrence so the original order survives.
    """
    seen = set()
    words: List[str] = []
    for line in lines:
        word = line.strip().lower()
        if len(word) != length or not word.isalpha() or word in seen:
            continue
        seen.add(word)
        words.append(word)
    return words


def load_words(path: str | Path, length: int = 4) -> List[str]:
    """
    Load a newline-separated word list.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Word list not found: {path}")

    return normalize_words(path.read_text(encoding="utf-8").splitlines(), length)


def load_world_dictionary(name: str, directory: str | Path, length: int = 4) -> List[str]:
    """Load a themed word list by file stem (with or without ".txt"); missing files give []."""
    stem = name[:-4] if name.lower().endswith(".txt") else name
    path = Path(directory) / f"{stem}.txt"
    if not path.exists():
        return []
    return load_words(path, length)
