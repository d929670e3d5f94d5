import hashlib
import logging
from pathlib import Path
from threading import Lock

import scripture_search.utils.cache as cache
from scripture_search.utils.corpus import parse_corpus
from scripture_search.utils.search import SearchIndex
from scripture_search.utils.source import read_corpus_text

logger = logging.getLogger(__name__)

## Serializes cache misses so concurrent requests parse the corpus once
load_lock = Lock()


def cache_key(settings) -> str:
    ## Front matter size changes segmentation, so it is part of the key
    return f"{settings.corpus_source}|{settings.front_matter_lines}"


def cache_path(settings) -> Path:
    digest = hashlib.sha1(cache_key(settings).encode("utf-8")).hexdigest()[:12]
    return Path(settings.cache_dir) / f"corpus_v{cache.SCHEMA_VERSION}_{digest}.json"


def build_index(settings) -> SearchIndex:
    """Parse the corpus from its source, persist the result, and index it."""
    raw_text = read_corpus_text(settings.corpus_source, timeout=settings.fetch_timeout)
    corpus = parse_corpus(raw_text, front_matter_lines=settings.front_matter_lines)

    try:
        cache.save_cached_corpus(cache_path(settings), corpus)
    except OSError as e:
        logger.warning("Could not write corpus cache: %s", e)

    return SearchIndex(corpus)


def load_index(settings, refresh: bool = False) -> SearchIndex:
    """
    Get a SearchIndex for the configured corpus.

    Looks in the in-process cache, then the on-disk parse cache, and only
    reads and parses the source when both miss (or `refresh` is set). A
    refresh builds the new index before replacing the old one, so a failed
    reload leaves the previous index in place.

    Raises:
        CorpusUnavailableError: If the corpus has to be read and cannot be.
    """
    key = cache_key(settings)

    if not refresh:
        index = cache.get_cached_index(key)
        if index is not None:
            return index

    with load_lock:
        if not refresh:
            ## Another request may have loaded it while we waited
            index = cache.get_cached_index(key)
            if index is not None:
                return index

            corpus = cache.load_cached_corpus(cache_path(settings))
            if corpus is not None:
                index = SearchIndex(corpus)
                cache.set_cached_index(key, index)
                return index

        index = build_index(settings)
        cache.set_cached_index(key, index)
        return index
