import json
import logging
from pathlib import Path
from threading import Lock

from cachetools import TTLCache

from scripture_search.utils.corpus import ParsedCorpus, Verse

logger = logging.getLogger(__name__)

## Bump whenever parse_corpus segments text differently; old cache files are then ignored
SCHEMA_VERSION = 1

VERSE_FIELDS = ("sequence_id", "reference", "text", "chapter_id")

## Built search indexes per corpus source
index_cache = TTLCache(maxsize=8, ttl=3600)
cache_lock = Lock()


def get_cached_index(key: str):
    with cache_lock:
        return index_cache.get(key)


def set_cached_index(key: str, index):
    with cache_lock:
        index_cache[key] = index


def clear_cached_index(key: str = None):
    with cache_lock:
        if key is None:
            index_cache.clear()
        else:
            index_cache.pop(key, None)


def configure_index_cache(ttl: float, maxsize: int = 8):
    """Replace the in-process cache with one using the given TTL."""
    global index_cache
    with cache_lock:
        index_cache = TTLCache(maxsize=maxsize, ttl=ttl)


def dump_corpus(corpus: ParsedCorpus) -> str:
    return json.dumps({
        "version": SCHEMA_VERSION,
        "verses": [{name: getattr(v, name) for name in VERSE_FIELDS} for v in corpus.verses],
        "words": list(corpus.words),
        "chapters": list(corpus.chapters),
        "legal": corpus.front_matter,
    }, ensure_ascii=False)


def load_corpus(payload: str):
    """
    Rebuild a ParsedCorpus from dump_corpus() output.

    Returns:
        ParsedCorpus, or None if the payload is corrupt or from another schema version.
    """
    try:
        data = json.loads(payload)
        if data.get("version") != SCHEMA_VERSION:
            logger.warning("Cached corpus has schema version %r, expected %r", data.get("version"), SCHEMA_VERSION)
            return None

        verses = []
        for item in data["verses"]:
            verse = Verse(**{name: item[name] for name in VERSE_FIELDS})
            if not isinstance(verse.sequence_id, int) or not all(
                isinstance(getattr(verse, name), str) for name in VERSE_FIELDS[1:]
            ):
                raise TypeError(f"Bad verse record: {item!r}")
            verses.append(verse)

        words = data["words"]
        chapters = data["chapters"]
        legal = data["legal"]
        if not isinstance(words, list) or not isinstance(chapters, list) or not isinstance(legal, str):
            raise TypeError("words and chapters must be lists, legal a string")
        if not all(isinstance(w, str) for w in words) or not all(isinstance(c, str) for c in chapters):
            raise TypeError("words and chapters must hold strings")
        if words != sorted(words):
            raise TypeError("words are not sorted")
        known_chapters = set(chapters)
        if any(v.chapter_id not in known_chapters for v in verses):
            raise TypeError("verse refers to a chapter missing from chapters")

        return ParsedCorpus(
            verses=tuple(verses),
            words=tuple(words),
            chapters=tuple(chapters),
            front_matter=legal,
        )
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning("Saved corpus data corrupt, reparsing: %s", e)
        return None


def save_cached_corpus(path, corpus: ParsedCorpus):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_corpus(corpus), encoding="utf-8")
    logger.debug("Saved parsed corpus to %s", path)


def load_cached_corpus(path):
    """Load a cached corpus from disk; a corrupt file is removed and None returned."""
    path = Path(path)
    if not path.exists():
        return None

    try:
        payload = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read cache file %s: %s", path, e)
        payload = None

    corpus = load_corpus(payload) if payload is not None else None
    if corpus is None:
        path.unlink(missing_ok=True)
    else:
        logger.debug("Loaded parsed corpus from %s", path)
    return corpus
