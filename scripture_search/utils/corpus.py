import re
import sys
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

# Constants
FRONT_MATTER_LINES = 260
MIN_PARAGRAPH_LENGTH = 5
MAX_REFERENCE_LINE = 50
SNIPPET_LENGTH = 30

LINE_BREAK = re.compile(r"\r?\n")
PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
BARE_CHAPTER_HEADING = re.compile(r"chapter\s+[0-9]+", re.IGNORECASE)
CITATION = re.compile(r"\d+:\d+", re.ASCII)
WORD = re.compile(r"\b[a-z]{3,}\b", re.ASCII)


@dataclass(frozen=True)
class Verse:
    sequence_id: int
    reference: str
    text: str
    chapter_id: str

    @property
    def number(self) -> str:
        """The part of the reference after its first colon ("7" for "1 Nephi 3:7")."""
        if ":" not in self.reference:
            return ""
        return self.reference.split(":", 1)[1]


@dataclass(frozen=True)
class ParsedCorpus:
    """
    Everything a single parse pass produces.

    Attributes:
        verses (tuple): Verse records in paragraph order.
        words (tuple): Distinct lowercase words (3+ letters), sorted.
        chapters (tuple): Distinct chapter ids in first-seen order.
        front_matter (str): Leading lines excluded from segmentation.
    """
    verses: tuple = ()
    words: tuple = ()
    chapters: tuple = ()
    front_matter: str = field(default="", repr=False)


def chapter_of(reference: str) -> str:
    """Chapter id of a reference: everything before the first colon, or the whole reference."""
    if ":" in reference:
        return reference.split(":")[0].strip()
    return reference


def split_reference(paragraph: str):
    """
    Split a trimmed paragraph into (reference, body).

    A paragraph whose first line is short and carries a chapter:verse marker
    is treated as "<reference>\\n<body lines...>". Anything else gets a
    synthesized reference made from the start of its text.
    """
    lines = paragraph.split("\n")

    if len(lines) > 1 and len(lines[0]) < MAX_REFERENCE_LINE and CITATION.search(lines[0]):
        return lines[0].strip(), " ".join(lines[1:]).strip()

    body = " ".join(lines)
    return body[:SNIPPET_LENGTH].strip() + "...", body


def is_repeated_header(reference: str, body: str) -> bool:
    ## e.g. body "1 Nephi 8" under reference "1 Nephi 8:1"
    return body.strip().lower() == reference.split(":")[0].strip().lower()


def parse_corpus(raw_text: str, front_matter_lines: int = FRONT_MATTER_LINES) -> ParsedCorpus:
    """
    Segment a flat scripture text into verses, words, and chapters.

    Args:
        raw_text (str): The whole corpus file.
        front_matter_lines (int): Number of leading lines to pass through untouched.

    Returns:
        ParsedCorpus: Empty collections when nothing can be segmented.
    """
    all_lines = LINE_BREAK.split(raw_text or "")
    front_matter = "\n".join(all_lines[:front_matter_lines])
    body_text = "\n".join(all_lines[front_matter_lines:])

    verses = []
    words = set()
    chapters = {}

    for index, para in enumerate(PARAGRAPH_BREAK.split(body_text)):
        clean_para = para.strip()
        if len(clean_para) < MIN_PARAGRAPH_LENGTH:
            continue

        ## Page-break artifacts such as "Chapter 7"
        if BARE_CHAPTER_HEADING.fullmatch(clean_para):
            continue

        reference, text = split_reference(clean_para)
        if is_repeated_header(reference, text):
            continue

        chapter_id = chapter_of(reference)
        chapters.setdefault(chapter_id, None)

        verses.append(Verse(
            sequence_id=index,
            reference=reference,
            text=text,
            chapter_id=chapter_id,
        ))
        words.update(WORD.findall(text.lower()))

    logger.info("Parsed %d verses in %d chapters (%d words)", len(verses), len(chapters), len(words))

    return ParsedCorpus(
        verses=tuple(verses),
        words=tuple(sorted(words)),
        chapters=tuple(chapters),
        front_matter=front_matter,
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    if len(sys.argv) < 2:
        print("Usage: python -m scripture_search.utils.corpus <corpus.txt> [front_matter_lines]")
        sys.exit(1)

    path = Path(sys.argv[1])
    lines = int(sys.argv[2]) if len(sys.argv) > 2 else FRONT_MATTER_LINES
    corpus = parse_corpus(path.read_text(encoding="utf-8"), front_matter_lines=lines)

    print(f"Verses:   {len(corpus.verses)}")
    print(f"Chapters: {len(corpus.chapters)}")
    print(f"Words:    {len(corpus.words)}")
    for chapter_id in corpus.chapters[:5]:
        print(f"  → {chapter_id}")
