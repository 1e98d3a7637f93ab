"""
Uniqueness check for letter bags.

A square can come out of the builder and still admit other arrangements
of the same letters (its transpose, anagram rows, ...). Players have to
reach one canonical answer, so the generator only keeps bags for which
this search finds exactly one square.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from ..lexicon.trie import PrefixDictionary, ROOT
from ..lexicon.square import column_words


class UniquenessVerifier:
    """
    Counts the word squares that use exactly a given multiset of letters.

    Counting stops at ``cap`` since only "exactly one" matters. Rows may
    repeat here: a player could build such a square from the bag too.
    """

    def __init__(
        self,
        dictionary: PrefixDictionary,
        size: Optional[int] = None,
        cap: int = 2,
        max_steps: int = 500_000,
    ):
        self.dictionary = dictionary
        self.size = size if size is not None else dictionary.length
        self.cap = cap
        self.max_steps = max_steps
        self.steps = 0
        self.budget_exceeded = False

    def is_unique(self, letters: Iterable[str]) -> bool:
        """True iff exactly one square can be built from ``letters``."""
        count = self.count_solutions(letters)
        return count == 1 and not self.budget_exceeded

    def count_solutions(self, letters: Iterable[str]) -> int:
        """Number of distinct squares over ``letters``, capped at ``cap``."""
        counts: Dict[str, int] = Counter(''.join(letters).lower())
        self.steps = 0
        self.budget_exceeded = False

        if sum(counts.values()) != self.size * self.size:
            return 0

        # Only words the bag can supply on its own are worth trying as rows
        viable = [
            word for word in self.dictionary.words_of_length(self.size)
            if all(counts.get(letter, 0) >= n for letter, n in Counter(word).items())
        ]

        grid: List[str] = []
        return self._count(grid, counts, (ROOT,) * self.size, viable, 0)

    def _consume(self, counts: Dict[str, int], word: str) -> bool:
        needed = Counter(word)
        if any(counts.get(letter, 0) < n for letter, n in needed.items()):
            return False
        for letter, n in needed.items():
            counts[letter] -= n
        return True

    def _restore(self, counts: Dict[str, int], word: str) -> None:
        for letter in word:
            counts[letter] += 1

    def _count(
        self,
        grid: List[str],
        counts: Dict[str, int],
        columns: Tuple[int, ...],
        viable: List[str],
        solutions: int,
    ) -> int:
        if len(grid) == self.size:
            if all(self.dictionary.contains(column) for column in column_words(grid)):
                return solutions + 1
            return solutions

        for word in viable:
            if solutions >= self.cap:
                break
            if self.steps >= self.max_steps:
                self.budget_exceeded = True
                break
            self.steps += 1

            if not self._consume(counts, word):
                continue

            advanced = self.dictionary.advance_all(columns, word)
            if advanced is not None:
                grid.append(word)
                solutions = self._count(grid, counts, advanced, viable, solutions)
                grid.pop()

            self._restore(counts, word)

            if self.budget_exceeded:
                break

        return solutions
