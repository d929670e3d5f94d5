import logging
from pathlib import Path

import requests

logger = logging.getLogger(__name__)


class CorpusUnavailableError(Exception):
    """The raw corpus text could not be obtained."""


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def read_corpus_text(source: str, timeout: float = 30) -> str:
    """
    Load the raw corpus text from a local path or an http(s) URL.

    Args:
        source (str): File path or URL.
        timeout (float): Seconds to wait on a remote fetch.

    Raises:
        CorpusUnavailableError: If the text could not be read.
    """
    if is_url(source):
        logger.debug("Downloading corpus from %s", source)
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Failed to download corpus from %s", source, exc_info=True)
            raise CorpusUnavailableError(f"Could not download {source}: {e}") from e
        ## Plain-text responses often omit a charset; the corpus is always UTF-8
        response.encoding = "utf-8"
        return response.text

    path = Path(source)
    if not path.exists():
        logger.error("Corpus file not found: %s", path)
        raise CorpusUnavailableError("File not found.")

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read corpus file %s", path, exc_info=True)
        raise CorpusUnavailableError(f"Could not read {path}: {e}") from e
