class SnippetLensError(Exception):
    """Base class for errors surfaced to the CLI and web layers."""


class EmptyCodeError(SnippetLensError):
    def __init__(self, message: str = "No code provided"):
        super().__init__(message)


class ReviewFailedError(SnippetLensError):
    """The model provider could not produce a response.

    Raised once retries are exhausted; the original exception is chained as
    ``__cause__``. Callers do not distinguish timeouts, auth failures or rate
    limits.
    """

    def __init__(self, message: str = "Failed to review code"):
        super().__init__(message)
