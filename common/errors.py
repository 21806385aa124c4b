"""Error types raised by the page-rag pipeline.

Anything not listed here (network failures, provider API errors, template
slot errors) is left to propagate as raised by the underlying library.
"""


class PageRagError(Exception):
    """Base class for pipeline errors."""


class InputShapeMismatchError(PageRagError, ValueError):
    """The loader did not produce the number of documents the caller expects."""

    def __init__(self, expected: int, actual: int, source: str | None = None):
        self.expected = expected
        self.actual = actual
        self.source = source
        where = f" from {source}" if source else ""
        super().__init__(
            f"Expected {expected} document(s){where}, loader returned {actual}"
        )


class EmptyIndexError(PageRagError, LookupError):
    """Similarity search was attempted on a store with no entries."""


class MissingCredentialError(PageRagError):
    """A provider requires an API key that is not configured."""


class PipelineStateError(PageRagError):
    """A graph node was entered without the state it depends on."""
