# ============================================
# documents.py - Reading the Corpus From Disk
# ============================================
# Three inputs, all plain text files:
#   - the docs file: names of the documents to index, one per line
#   - each document: whitespace separated words
#   - the noise words file: one noise word per line
#
# Anything that cannot be read raises DocumentSourceError. We never skip a
# document, a half-built index is worse than no index.

import logging
import os
from typing import List

from errors import DocumentSourceError
from preprocessor import tokenize

log = logging.getLogger("lse.documents")


def _read_text(path) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        log.error("Failed to read %s: %s", path, e)
        raise DocumentSourceError(path, str(e)) from e


def resolve_document(doc_name: str, base_dir: str = "") -> str:
    """
    Document names are taken as-is when they exist, otherwise they are
    looked up next to the docs file that listed them.
    """
    if os.path.isabs(doc_name) or os.path.exists(doc_name) or not base_dir:
        return doc_name
    candidate = os.path.join(base_dir, doc_name)
    if os.path.exists(candidate):
        return candidate
    return doc_name


def list_documents(docs_file) -> List[str]:
    """Returns the document paths listed in docs_file, in listed order."""
    base_dir = os.path.dirname(os.path.abspath(docs_file))
    names = tokenize(_read_text(docs_file))
    return [resolve_document(name, base_dir) for name in names]


def token_stream(doc_path) -> List[str]:
    """Raw tokens of one document, in original order."""
    return tokenize(_read_text(doc_path))


def load_noise_words(noise_words_file) -> List[str]:
    return tokenize(_read_text(noise_words_file))


def resolve_within(path, directory) -> str:
    """
    Resolves path (relative paths against directory) and returns the real
    path, or raises ValueError when it ends up outside directory.
    Symlinks and ".." are followed before the check.
    """
    root = os.path.realpath(directory)
    resolved = os.path.realpath(os.path.join(root, path))
    if os.path.commonpath([root, resolved]) != root:
        raise ValueError(f"{path} is outside {directory}")
    return resolved
