"""A character trie used as a dictionary of words."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


@dataclass
class _Node:
    word: bool = False
    children: dict[str, "_Node"] = field(default_factory=dict)


class Trie:
    """An N-ary tree where each word is stored character by character."""

    def __init__(self) -> None:
        self._root = _Node()

    def add_word(self, word: str) -> None:
        """Add a word to the trie."""
        node = self._root
        for char in word:
            node = node.children.setdefault(char, _Node())
        node.word = True

    def add_dictionary(self, stream: Iterable[str]) -> None:
        """Add every whitespace-separated word read from a text stream."""
        for line in stream:
            for word in line.split():
                self.add_word(word)

    def check_word(self, word: str) -> bool:
        """Return whether the word was added to the trie."""
        node = self._root
        for char in word:
            child = node.children.get(char)
            if child is None:
                return False
            node = child
        return node.word

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.check_word(word)