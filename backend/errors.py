# ============================================
# errors.py - Search Engine Exceptions
# ============================================
# Only the input side of indexing can really fail. A bad token or an
# unknown keyword is a normal outcome and never ends up here.


class SearchEngineError(Exception):
    """Base class for everything the search engine raises on purpose."""


class DocumentSourceError(SearchEngineError):
    """
    A document listing, a document or the noise word file could not be read.
    Fatal for the whole indexing run.
    """

    def __init__(self, path, reason=""):
        self.path = str(path)
        self.reason = reason
        message = f"Cannot read {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class IndexFrozenError(SearchEngineError):
    """Raised when a document is added after the index was frozen."""


class IndexNotBuiltError(SearchEngineError):
    """Raised when a query arrives before any index has been built."""


class ConfigError(SearchEngineError):
    """An LSE_* setting has a value the engine cannot use."""
