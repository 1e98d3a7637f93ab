"""
Backtracking construction of word squares.

Rows are filled top to bottom from a seeded shuffle of the dictionary.
Each column is tracked as a node in the dictionary's trie, so placing a
row is a single ``advance`` per column: a row is rejected as soon as any
column stops being a prefix of some word.
"""

import heapq
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from ..lexicon.trie import PrefixDictionary, ROOT
from ..lexicon.square import column_words
from .rng import DeterministicRandomSource


class SquareBuilder:
    """
    Finds one N x N word square per call to ``build``.

    Attributes:
        dictionary: Words the rows and columns are drawn from
        size: Square size N
        max_steps: Candidate examinations allowed per build
        steps: Candidates examined by the last build
        exhausted: Last build covered the whole search space without a square
        budget_exceeded: Last build was stopped by ``max_steps``
    """

    def __init__(self, dictionary: PrefixDictionary, size: Optional[int] = None, max_steps: int = 200_000):
        self.dictionary = dictionary
        self.size = size if size is not None else dictionary.length
        self.max_steps = max_steps
        self.steps = 0
        self.exhausted = False
        self.budget_exceeded = False

    def build(self, source: DeterministicRandomSource) -> Optional[List[str]]:
        """
        Shuffle the word list with ``source`` and search for a square.

        Returns the rows of the first square found, or None. Fewer than
        ``size`` words cannot fill distinct rows, so that case returns None
        without drawing from the source.
        """
        words = self.dictionary.words_of_length(self.size)
        self.steps = 0
        self.budget_exceeded = False

        if len(words) < self.size:
            self.exhausted = True
            return None

        return self.search(source.shuffle(words))

    def search(self, candidates: Sequence[str]) -> Optional[List[str]]:
        """Depth-first search over ``candidates`` in order; first square wins."""
        self.steps = 0
        self.exhausted = False
        self.budget_exceeded = False

        # Buckets keep each word's position so later rows visit them in candidate order
        buckets: Dict[str, List[Tuple[int, str]]] = {}
        for i, word in enumerate(candidates):
            buckets.setdefault(word[0], []).append((i, word))

        rows: List[str] = []
        used: Set[str] = set()
        columns = (ROOT,) * self.size

        square = self._fill(rows, used, columns, candidates, buckets)
        if square is None and not self.budget_exceeded:
            self.exhausted = True
        return square

    def _row_options(
        self,
        columns: Tuple[int, ...],
        candidates: Sequence[str],
        buckets: Dict[str, List[Tuple[int, str]]],
        first_row: bool,
    ) -> Iterator[str]:
        if first_row:
            yield from candidates
            return
        # The first letter of the row must continue column 0
        allowed = [buckets[letter] for letter in self.dictionary.next_letters(columns[0]) if letter in buckets]
        for _, word in heapq.merge(*allowed):
            yield word

    def _columns_complete(self, rows: List[str]) -> bool:
        return all(self.dictionary.contains(column) for column in column_words(rows))

    def _fill(
        self,
        rows: List[str],
        used: Set[str],
        columns: Tuple[int, ...],
        candidates: Sequence[str],
        buckets: Dict[str, List[Tuple[int, str]]],
    ) -> Optional[List[str]]:
        if len(rows) == self.size:
            return list(rows) if self._columns_complete(rows) else None

        for word in self._row_options(columns, candidates, buckets, first_row=not rows):
            if word in used:
                continue
            if self.steps >= self.max_steps:
                self.budget_exceeded = True
                return None
            self.steps += 1

            advanced = self.dictionary.advance_all(columns, word)
            if advanced is None:
                continue

            rows.append(word)
            used.add(word)
            square = self._fill(rows, used, advanced, candidates, buckets)
            if square is not None:
                return square
            rows.pop()
            used.discard(word)

            if self.budget_exceeded:
                return None

        return None
