"""The main configuration file for pytest"""

import pytest
from fastapi.testclient import TestClient

import scripture_search.utils.cache as cache
from scripture_search.config import Settings
from scripture_search.utils.corpus import parse_corpus
from scripture_search.utils.search import SearchIndex


FRONT_MATTER = 3

CORPUS_TEXT = "\n".join([
    "THE BOOK OF MORMON",
    "Legal notice: public domain.",
    "Second front matter line",
    "",
    "1 Nephi 1:1",
    "I, Nephi, having been born of goodly parents, therefore I was taught",
    "somewhat in all the learning of my father.",
    "",
    "1 Nephi 1:2",
    "Yea, I make a record in the language of my father, which consists",
    "of the learning of the Jews and the language of the Egyptians.",
    "",
    "Chapter 2",
    "",
    "1 Nephi 2:1",
    "1 NEPHI 2",
    "",
    "1 Nephi 2:1",
    "For behold, it came to pass that the Lord spake unto my father.",
    "",
    "",
    "1 Nephi 2:2",
    "And it came to pass that the Lord commanded my father.",
    "",
    "ok",
    "",
    "An untitled paragraph with no citation at all in it",
    "",
    "Alma 5:12",
    "And according to his faith there was a mighty change wrought in his heart.",
])


@pytest.fixture(autouse=True)
def clear_index_cache():
    """Every test starts without any in-process index."""
    cache.clear_cached_index()
    yield
    cache.clear_cached_index()


@pytest.fixture
def corpus():
    return parse_corpus(CORPUS_TEXT, front_matter_lines=FRONT_MATTER)


@pytest.fixture
def index(corpus):
    return SearchIndex(corpus)


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / "bom.txt"
    path.write_text(CORPUS_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path, corpus_file):
    """Settings pointing at the sample corpus with a throwaway cache dir."""
    return Settings(
        corpus_source=str(corpus_file),
        front_matter_lines=FRONT_MATTER,
        cache_dir=str(tmp_path / "cache"),
    )


@pytest.fixture
def client(index):
    """A test client whose routes all see the sample index."""
    from scripture_search.main import app, get_index

    app.dependency_overrides[get_index] = lambda: index
    yield TestClient(app)
    app.dependency_overrides.clear()
