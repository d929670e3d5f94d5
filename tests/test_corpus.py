"""Test the corpus parser."""

from scripture_search.utils.corpus import parse_corpus, chapter_of, split_reference
from tests.conftest import CORPUS_TEXT, FRONT_MATTER


def test_front_matter_is_passed_through(corpus):
    assert corpus.front_matter == "\n".join(CORPUS_TEXT.split("\n")[:FRONT_MATTER])
    assert all("public domain" not in v.text for v in corpus.verses)


def test_verses_in_paragraph_order(corpus):
    assert [v.reference for v in corpus.verses] == [
        "1 Nephi 1:1",
        "1 Nephi 1:2",
        "1 Nephi 2:1",
        "1 Nephi 2:2",
        "An untitled paragraph with no...",
        "Alma 5:12",
    ]


def test_sequence_ids_keep_original_paragraph_positions(corpus):
    ## Paragraphs 2 ("Chapter 2"), 3 (repeated header) and 6 ("ok") are dropped
    assert [v.sequence_id for v in corpus.verses] == [0, 1, 4, 5, 7, 8]


def test_reference_line_is_split_from_body(corpus):
    first = corpus.verses[0]
    assert first.reference == "1 Nephi 1:1"
    assert first.text == (
        "I, Nephi, having been born of goodly parents, therefore I was taught "
        "somewhat in all the learning of my father."
    )
    assert first.number == "1"


def test_text_never_contains_newlines(corpus):
    assert corpus.verses
    for verse in corpus.verses:
        assert "\n" not in verse.text
        assert verse.reference


def test_chapter_id_is_reference_before_colon(corpus):
    for verse in corpus.verses:
        if ":" in verse.reference:
            assert verse.chapter_id == verse.reference.split(":")[0].strip()
        else:
            assert verse.chapter_id == verse.reference


def test_chapters_in_first_seen_order(corpus):
    assert corpus.chapters == (
        "1 Nephi 1",
        "1 Nephi 2",
        "An untitled paragraph with no...",
        "Alma 5",
    )
    seen = []
    for verse in corpus.verses:
        if verse.chapter_id not in seen:
            seen.append(verse.chapter_id)
    assert list(corpus.chapters) == seen


def test_words_sorted_lowercase_and_unique(corpus):
    words = list(corpus.words)
    assert words == sorted(set(words))
    for word in words:
        assert word.isalpha() and word.islower() and len(word) >= 3
    assert "nephi" in words
    assert "father" in words
    assert "of" not in words


def test_words_need_ascii_word_boundaries():
    corpus = parse_corpus("1 Nephi 1:1\nabc123 hello_there plain words", front_matter_lines=0)
    assert corpus.words == ("plain", "words")


def test_bare_chapter_heading_is_dropped():
    corpus = parse_corpus("Chapter 7\n\nchapter   12", front_matter_lines=0)
    assert corpus.verses == ()


def test_chapter_heading_with_content_is_kept():
    corpus = parse_corpus("Chapter 7 begins here", front_matter_lines=0)
    assert len(corpus.verses) == 1
    assert corpus.verses[0].text == "Chapter 7 begins here"


def test_repeated_chapter_header_is_dropped():
    corpus = parse_corpus("Alma 5:1\nalma 5\n\nAlma 5:2\nReal content here.", front_matter_lines=0)
    assert [v.reference for v in corpus.verses] == ["Alma 5:2"]
    assert corpus.verses[0].sequence_id == 1


def test_fallback_reference_for_uncited_paragraph():
    text = "And it came to pass that the people\nwere gathered together."
    corpus = parse_corpus(text, front_matter_lines=0)
    verse = corpus.verses[0]
    assert verse.text == "And it came to pass that the people were gathered together."
    assert verse.reference == "And it came to pass that the p..."
    assert verse.chapter_id == verse.reference
    assert verse.number == ""


def test_single_line_citation_is_not_split():
    corpus = parse_corpus("Alma 5:12 And according to his faith.", front_matter_lines=0)
    verse = corpus.verses[0]
    assert verse.text == "Alma 5:12 And according to his faith."
    assert verse.reference == "Alma 5:12 And according to his..."
    assert verse.chapter_id == "Alma 5"


def test_long_first_line_is_not_a_reference():
    first = "This line is far too long to be a citation even though 3:4 appears"
    reference, body = split_reference(f"{first}\nsecond line")
    assert body == f"{first} second line"
    assert reference.endswith("...")


def test_windows_line_endings():
    assert parse_corpus(CORPUS_TEXT.replace("\n", "\r\n"), FRONT_MATTER) == parse_corpus(CORPUS_TEXT, FRONT_MATTER)


def test_empty_input_gives_empty_collections():
    for text in ("", "   \n\n\t\n", None):
        corpus = parse_corpus(text, front_matter_lines=0)
        assert corpus.verses == ()
        assert corpus.words == ()
        assert corpus.chapters == ()


def test_short_file_is_all_front_matter():
    corpus = parse_corpus("1 Nephi 1:1\nSome verse text here.")
    assert corpus.verses == ()
    assert corpus.front_matter.startswith("1 Nephi 1:1")


def test_chapter_of():
    assert chapter_of("1 Nephi 3:7") == "1 Nephi 3"
    assert chapter_of("Moroni 10") == "Moroni 10"
