"""Word list used to decide which runs on the grid are real words."""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Set
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r'^[a-z]+$')

MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 12

# Used when no word file can be read
FALLBACK_WORDS = frozenset({
    "cat", "dog", "the", "and", "but", "car", "bat", "hat", "mat", "rat",
    "get", "set", "pet", "net", "bet", "let", "met", "wet", "yet", "jet",
    "big", "pig", "fig", "dig", "wig", "jig", "rig", "bag", "tag", "rag",
    "run", "fun", "sun", "gun", "bun", "nun", "pun", "cut", "hut",
    "game", "time", "play", "word", "make", "take", "give", "love", "home",
})


def normalize_words(
    lines: Iterable[str],
    min_length: int = MIN_WORD_LENGTH,
    max_length: int = MAX_WORD_LENGTH,
) -> Set[str]:
    """Trim and lower-case raw lines, keeping purely alphabetic words of allowed length."""
    words: Set[str] = set()
    for line in lines:
        word = line.strip().lower()
        if min_length <= len(word) <= max_length and _WORD_RE.match(word):
            words.add(word)
    return words


class WordList(BaseModel):
    """
    Dictionary of valid lowercase words.

    Attributes:
        words: The accepted words, lowercase
        loaded: Whether a load attempt has finished (successfully or via fallback)
        source: Where the words came from ("fallback" for the embedded list)
    """

    words: Set[str] = Field(default_factory=set)
    loaded: bool = False
    source: Optional[str] = None

    @classmethod
    def from_words(cls, words: Iterable[str], source: str = "memory") -> "WordList":
        """Build an already-loaded word list from an iterable of words."""
        return cls(words=normalize_words(words), loaded=True, source=source)

    @classmethod
    def fallback(cls) -> "WordList":
        return cls(words=set(FALLBACK_WORDS), loaded=True, source="fallback")

    @classmethod
    def load(
        cls,
        path: Optional[str | Path],
        min_length: int = MIN_WORD_LENGTH,
        max_length: int = MAX_WORD_LENGTH,
    ) -> "WordList":
        """
        Load a word file with one word per line.

        A missing, unreadable, or empty file never raises: the embedded
        fallback list is used instead and a warning is logged.

        Args:
            path: Path to the word file, or None to go straight to the fallback
            min_length: Shortest word kept
            max_length: Longest word kept

        Returns:
            A loaded WordList
        """
        if path is None:
            logger.warning("No word file configured, using %d fallback words", len(FALLBACK_WORDS))
            return cls.fallback()

        try:
            with open(path, encoding="utf-8") as f:
                words = normalize_words(f, min_length, max_length)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to load words from %s: %s; using fallback list", path, e)
            return cls.fallback()

        if not words:
            logger.warning("Word file %s has no usable words; using fallback list", path)
            return cls.fallback()

        logger.info("Loaded %s words from %s", f"{len(words):,}", path)
        return cls(words=words, loaded=True, source=str(path))

    def contains(self, word: str) -> bool:
        """Case-insensitive membership check."""
        return word.lower() in self.words

    def __contains__(self, word: str) -> bool:
        return self.contains(word)

    def __len__(self) -> int:
        return len(self.words)
