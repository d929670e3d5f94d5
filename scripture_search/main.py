import logging
from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
import scripture_search.utils.cache as cache
from scripture_search.config import get_settings
from scripture_search.utils.loader import load_index
from scripture_search.utils.search import SearchIndex, MAX_RESULTS
from scripture_search.utils.source import CorpusUnavailableError

settings = get_settings()

DEBUG_MODE = settings.debug  # Global debug mode flag

def debug(msg):
    if DEBUG_MODE:
        print(f"[DEBUG] {msg}")

debug("🟢 main.py is loading")

logger = logging.getLogger(__name__)
logger.setLevel(logging.DEBUG if DEBUG_MODE else logging.INFO)

cache.configure_index_cache(ttl=settings.cache_ttl)

## FastAPI app setup
debug("Initializing FastAPI app...")
app = FastAPI(title="Scripture Search")


def get_index() -> SearchIndex:
    return load_index(settings)


def verse_to_dict(verse):
    return {
        "id": verse.sequence_id,
        "reference": verse.reference,
        "text": verse.text,
        "chapter_id": verse.chapter_id,
    }


@app.exception_handler(CorpusUnavailableError)
async def corpus_unavailable(request: Request, exc: CorpusUnavailableError):
    logger.error("Corpus unavailable: %s", exc)
    return JSONResponse(status_code=503, content={"status": f"Error: {exc}"})


@app.get("/")
def status(index: SearchIndex = Depends(get_index)):
    debug("[GET] /")
    return {
        "status": "Ready to search.",
        "verses": len(index.verses),
        "chapters": len(index.chapters),
    }


@app.get("/legal")
def legal(index: SearchIndex = Depends(get_index)):
    return {"title": "Legal Disclosure", "text": index.corpus.front_matter}


@app.get("/suggest")
def suggest(q: str = "", index: SearchIndex = Depends(get_index)):
    suggestions = index.suggest(q)
    debug(f"[GET] /suggest q={q!r} -> {len(suggestions)} suggestions")
    return {"suggestions": suggestions}


@app.get("/search")
def search(q: str = "", index: SearchIndex = Depends(get_index)):
    debug(f"[GET] /search q={q!r}")

    result = index.search(q)
    if result is None:
        return {"query": q, "executed": False, "results": []}

    response = {
        "query": q,
        "executed": True,
        "results": [verse_to_dict(v) for v in result.verses],
        "limited": result.limited,
    }
    if not result.verses:
        response["message"] = "No matches found."
    elif result.limited:
        response["message"] = f"Results limited to {MAX_RESULTS} verses."
    return response


@app.get("/chapters")
def chapters(index: SearchIndex = Depends(get_index)):
    return {"chapters": list(index.chapters)}


@app.get("/chapters/{chapter_id:path}")
def read_chapter(chapter_id: str, index: SearchIndex = Depends(get_index)):
    debug(f"[GET] /chapters/{chapter_id}")

    if not index.has_chapter(chapter_id):
        debug("⚠️ Chapter not found")
        raise HTTPException(status_code=404, detail=f"Chapter not found: {chapter_id}")

    return {
        "chapter": chapter_id,
        "passages": [
            {"number": number, "reference": reference, "text": text}
            for number, reference, text in index.chapter_passages(chapter_id)
        ],
        "previous": index.adjacent_chapter(chapter_id, -1),
        "next": index.adjacent_chapter(chapter_id, 1),
    }


@app.post("/reload")
def reload():
    debug("[POST] /reload")
    index = load_index(settings, refresh=True)
    return {
        "status": "Ready to search.",
        "verses": len(index.verses),
        "chapters": len(index.chapters),
    }
