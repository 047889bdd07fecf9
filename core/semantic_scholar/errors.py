"""Exception classes for the Semantic Scholar client."""


class SemanticScholarError(Exception):
    """Base Semantic Scholar client exception."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class S2RequestFailedError(SemanticScholarError):
    """The API answered with a non-success HTTP status."""

    pass


class S2TransportError(SemanticScholarError):
    """No response was received (connection failure, timeout)."""

    pass


class S2ResponseDecodeError(SemanticScholarError):
    """The response body was not the JSON document expected."""

    pass


class InvalidParameterError(SemanticScholarError, ValueError):
    """A query parameter was rejected before any request was sent."""

    pass


class S2ApiKeyNotFoundError(SemanticScholarError):
    """SEMANTIC_SCHOLAR_API_KEY is required but not set."""

    def __init__(self, env_var: str = "SEMANTIC_SCHOLAR_API_KEY"):
        super().__init__(f"{env_var} environment variable is required")
        self.env_var = env_var
