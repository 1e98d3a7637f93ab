"""
Prefix dictionary for fixed-length words.

Words are stored in a node arena: node ``i`` is an edge map
(letter -> child index) plus a terminal flag, with the root at index 0.
The search code walks the arena directly through ``advance`` so column
prefixes can be extended one letter at a time.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple


ROOT = 0


class PrefixDictionary:
    """
    Immutable set of lowercase words of one length with prefix queries.

    Words of any other length, and words containing non-letters, are
    discarded during construction. Duplicates collapse to the first
    occurrence, so ``words_of_length`` preserves insertion order.
    """

    def __init__(self, words: Iterable[str], length: int = 4):
        if length < 1:
            raise ValueError(f"Word length must be positive, got {length}")

        self.length = length
        self._edges: List[Dict[str, int]] = [{}]
        self._terminal: List[bool] = [False]
        self._words: List[str] = []

        for word in words:
            word = word.lower()
            if len(word) != length or not word.isalpha():
                continue
            if self._insert(word):
                self._words.append(word)

    def _insert(self, word: str) -> bool:
        """Insert a word, returning False if it was already stored."""
        node = ROOT
        for letter in word:
            child = self._edges[node].get(letter)
            if child is None:
                child = len(self._edges)
                self._edges.append({})
                self._terminal.append(False)
                self._edges[node][letter] = child
            node = child

        if self._terminal[node]:
            return False
        self._terminal[node] = True
        return True

    def _find(self, prefix: str) -> Optional[int]:
        node = ROOT
        for letter in prefix:
            node = self._edges[node].get(letter)
            if node is None:
                return None
        return node

    # Arena navigation

    def advance(self, node: int, letter: str) -> Optional[int]:
        """Child of ``node`` along ``letter``, or None if no word continues that way."""
        return self._edges[node].get(letter)

    def advance_all(self, nodes: Sequence[int], word: str) -> Optional[Tuple[int, ...]]:
        """Advance each node by the matching letter of ``word``; None if any step fails."""
        advanced = []
        for node, letter in zip(nodes, word):
            child = self._edges[node].get(letter)
            if child is None:
                return None
            advanced.append(child)
        return tuple(advanced)

    def next_letters(self, node: int) -> List[str]:
        """Letters that extend the prefix ending at ``node``."""
        return list(self._edges[node])

    def is_terminal(self, node: int) -> bool:
        return self._terminal[node]

    # Queries

    def contains(self, word: str) -> bool:
        """Exact membership. Always False for a word of the wrong length."""
        if len(word) != self.length:
            return False
        node = self._find(word.lower())
        return node is not None and self._terminal[node]

    def has_prefix(self, prefix: str) -> bool:
        """True if some stored word starts with ``prefix``."""
        if not self._words or len(prefix) > self.length:
            return False
        return self._find(prefix.lower()) is not None

    def words_of_length(self, n: int) -> List[str]:
        """All stored words of length ``n``, in insertion order."""
        if n != self.length:
            return []
        return list(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"PrefixDictionary(length={self.length}, words={len(self._words)})"
