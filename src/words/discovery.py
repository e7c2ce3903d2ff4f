import logging
from typing import Iterable, List, Set
from pydantic import BaseModel, Field

from .models import FoundWord


logger = logging.getLogger(__name__)


class DiscoveryTracker(BaseModel):
    """
    Remembers which words were already announced this session.

    `discovered` only grows until `reset()`; `found_words` is the short-lived
    list of recent discoveries that the display highlights.

    Attributes:
        discovered: Every word surfaced since the last reset
        found_words: Recent discoveries still inside the highlight window
        window_ms: How long a discovery stays in `found_words`
    """

    discovered: Set[str] = Field(default_factory=set)
    found_words: List[FoundWord] = Field(default_factory=list)
    window_ms: float = Field(default=3000, gt=0)

    def update(self, words: Iterable[str], now: float) -> List[FoundWord]:
        """
        Record the words from a scan and drop expired highlights.

        Args:
            words: Words from the latest scan, uppercase
            now: Current time in milliseconds

        Returns:
            The FoundWord entries created by this call
        """
        new_entries: List[FoundWord] = []
        for word in words:
            if word in self.discovered:
                continue
            entry = FoundWord(word=word, discovered_at=now)
            self.discovered.add(word)
            self.found_words.append(entry)
            new_entries.append(entry)
            logger.info("Discovered word %s", word)

        self.expire(now)
        return new_entries

    def expire(self, now: float) -> None:
        """Drop highlights older than the window; dropped entries stop being new."""
        visible = []
        for fw in self.found_words:
            if now - fw.discovered_at < self.window_ms:
                visible.append(fw)
            else:
                fw.is_new = False
        self.found_words = visible

    def reset(self) -> None:
        self.discovered.clear()
        self.found_words = []
