import logging
from bisect import bisect_left
from dataclasses import dataclass
from typing import List, Optional, Tuple

from scripture_search.utils.corpus import ParsedCorpus, Verse

logger = logging.getLogger(__name__)

MIN_PREFIX_LENGTH = 2
MAX_SUGGESTIONS = 15
MAX_RESULTS = 50


@dataclass(frozen=True)
class SearchResult:
    query: str
    verses: Tuple[Verse, ...]
    limited: bool = False  # True when the result cap was hit


class SearchIndex:
    """
    Read-only queries over a ParsedCorpus: word suggestions, substring search,
    and chapter retrieval for sequential reading.
    """

    def __init__(self, corpus: ParsedCorpus):
        self.corpus = corpus
        self._chapter_positions = {chapter_id: i for i, chapter_id in enumerate(corpus.chapters)}

    @property
    def verses(self):
        return self.corpus.verses

    @property
    def words(self):
        return self.corpus.words

    @property
    def chapters(self):
        return self.corpus.chapters

    def suggest(self, prefix: str, limit: int = MAX_SUGGESTIONS) -> List[str]:
        """Up to `limit` indexed words starting with `prefix`, alphabetically."""
        prefix = (prefix or "").lower()
        if len(prefix) < MIN_PREFIX_LENGTH:
            return []

        words = self.corpus.words
        matches = []
        for word in words[bisect_left(words, prefix):]:
            if not word.startswith(prefix) or len(matches) >= limit:
                break
            matches.append(word)
        return matches

    def search(self, query: str, limit: int = MAX_RESULTS) -> Optional[SearchResult]:
        """
        Find verses whose text contains `query`, case-insensitively.

        Returns None for an empty query (nothing executed), otherwise a
        SearchResult in parse order, capped at `limit` verses.

        Raises:
            ValueError: If `limit` is less than 1.
        """
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit!r}")
        if not query:
            return None

        q = query.lower()
        results = []
        for verse in self.corpus.verses:
            if q in verse.text.lower():
                results.append(verse)
                if len(results) == limit:
                    break

        logger.debug("Search %r matched %d verses", query, len(results))
        return SearchResult(query=query, verses=tuple(results), limited=len(results) == limit)

    def verses_in_chapter(self, chapter_id: str) -> List[Verse]:
        return [v for v in self.corpus.verses if v.chapter_id == chapter_id]

    def chapter_passages(self, chapter_id: str) -> List[Tuple[str, str, str]]:
        """(verse number, reference, text) for reading a chapter top to bottom."""
        return [(v.number, v.reference, v.text) for v in self.verses_in_chapter(chapter_id)]

    def has_chapter(self, chapter_id: str) -> bool:
        return chapter_id in self._chapter_positions

    def adjacent_chapter(self, chapter_id: str, direction: int) -> Optional[str]:
        """The chapter before (-1) or after (+1) `chapter_id`, or None at either end."""
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")

        idx = self._chapter_positions.get(chapter_id)
        if idx is None:
            return None

        new_idx = idx + direction
        if 0 <= new_idx < len(self.corpus.chapters):
            return self.corpus.chapters[new_idx]
        return None


class ChapterCursor:
    """Tracks which chapter a reader has open and steps through the chapter list."""

    def __init__(self, index: SearchIndex):
        self.index = index
        self.current = None

    def open(self, chapter_id: str) -> bool:
        if not self.index.has_chapter(chapter_id):
            logger.warning("Chapter not found: %s", chapter_id)
            return False
        self.current = chapter_id
        return True

    @property
    def has_previous(self) -> bool:
        return self.current is not None and self.index.adjacent_chapter(self.current, -1) is not None

    @property
    def has_next(self) -> bool:
        return self.current is not None and self.index.adjacent_chapter(self.current, 1) is not None

    def move(self, direction: int) -> Optional[str]:
        """Step one chapter; stays put (and returns None) past either end."""
        if self.current is None:
            return None
        target = self.index.adjacent_chapter(self.current, direction)
        if target is not None:
            self.current = target
        return target
