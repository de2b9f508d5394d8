# main.py - Little Search Engine HTTP API
# Builds the keyword index from the configured docs / noise word files and
# answers "kw1 or kw2" top 5 searches against it.

import logging
import os
import threading
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_settings
from documents import list_documents, load_noise_words, resolve_within, token_stream
from errors import DocumentSourceError, IndexNotBuiltError
from invertedIndex import InvertedIndex, build_inverted_index
from preprocessor import get_keyword
from topSearch import top5search

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("lse.api")

# ---------------------------------------------------------------------
# Index state: replaced as a whole, never mutated after it is built
# ---------------------------------------------------------------------
_index: Optional[InvertedIndex] = None
# guards reads and the swap of _index
_index_lock = threading.Lock()
# one build at a time; queries never wait on it
_build_lock = threading.Lock()


def build_index(docs_file: Optional[str] = None, noise_words_file: Optional[str] = None) -> InvertedIndex:
    """
    Loads noise words, then indexes every listed document.
    The new index only replaces the current one if the whole run succeeds.
    """
    global _index
    docs_file = docs_file or os.path.join(settings.corpus_dir, settings.docs_file)
    noise_words_file = noise_words_file or os.path.join(settings.corpus_dir, settings.noise_words_file)

    log.info("Building index from %s (noise words: %s)", docs_file, noise_words_file)
    with _build_lock:
        noise_words = load_noise_words(noise_words_file)
        documents = list_documents(docs_file)
        index = build_inverted_index(documents, token_stream, noise_words)
        with _index_lock:
            _index = index
    return index


def get_index() -> InvertedIndex:
    with _index_lock:
        if _index is None:
            raise IndexNotBuiltError("No index available. Build index first.")
        return _index


def reset_index() -> None:
    global _index
    with _index_lock:
        _index = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.build_on_startup:
        build_index()
    yield


app = FastAPI(title="Little Search Engine", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DocumentSourceError)
async def document_source_error_handler(request: Request, exc: DocumentSourceError):
    # details stay in the server log, file names and contents never go back to the client
    log.error("Indexing run aborted: %s", exc)
    return JSONResponse(status_code=500, content={"error": "Indexing failed: a corpus file could not be read"})


@app.exception_handler(IndexNotBuiltError)
async def index_not_built_handler(request: Request, exc: IndexNotBuiltError):
    return JSONResponse(status_code=409, content={"error": str(exc)})


# ---------------------------------------------------------------------
# /index endpoint - (re)build the index from the corpus files
# ---------------------------------------------------------------------
@app.post("/index")
def make_index(
    docs_file: Optional[str] = Body(None, embed=True),
    noise_words_file: Optional[str] = Body(None, embed=True),
):
    # files named by a client must live under the corpus directory
    try:
        if docs_file:
            docs_file = resolve_within(docs_file, settings.corpus_dir)
        if noise_words_file:
            noise_words_file = resolve_within(noise_words_file, settings.corpus_dir)
    except ValueError:
        raise HTTPException(status_code=400, detail="Files must be inside the corpus directory") from None

    index = build_index(docs_file, noise_words_file)
    return {"success": True, "index_stats": index.stats()}


# ---------------------------------------------------------------------
# /search endpoint - top matches for "kw1 or kw2"
# ---------------------------------------------------------------------
@app.get("/search")
def search(kw1: str, kw2: str, k: int = settings.result_limit) -> Dict[str, Any]:
    if k < 1:
        raise HTTPException(status_code=422, detail="k must be at least 1")

    index = get_index()
    keyword1 = get_keyword(kw1, index.noise_words)
    keyword2 = get_keyword(kw2, index.noise_words)

    # a query word that is not a keyword simply matches nothing
    results = top5search(index, keyword1 or "", keyword2 or "", limit=k)
    return {"kw1": keyword1, "kw2": keyword2, "k": k, "results": results}


@app.get("/keywords/{keyword}")
def keyword_occurrences(keyword: str):
    index = get_index()
    normalized = get_keyword(keyword, index.noise_words)
    if normalized is None or normalized not in index:
        raise HTTPException(status_code=404, detail=f"'{keyword}' is not an indexed keyword")

    occurrences = [
        {"document": occ.document, "frequency": occ.frequency}
        for occ in index.occurrences(normalized)
    ]
    return {"keyword": normalized, "occurrences": occurrences}


@app.get("/stats")
def stats():
    return get_index().stats()
