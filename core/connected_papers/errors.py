"""Exception classes for the Connected Papers client.

Every failure to obtain a graph snapshot from the service is a
ConnectedPapersError. Statuses the service reports in a successful
response (BAD_ID, OUT_OF_REQUESTS, ...) are not errors; they arrive as
ordinary GraphSnapshot values.
"""


class ConnectedPapersError(Exception):
    """Base Connected Papers client exception."""

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


class RequestFailedError(ConnectedPapersError):
    """The service answered with a non-success HTTP status."""

    pass


class TransportError(ConnectedPapersError):
    """No response was received (connection failure, timeout)."""

    pass


class ResponseDecodeError(ConnectedPapersError):
    """The response body was not the JSON document expected."""

    pass


class ApiKeyNotFoundError(ConnectedPapersError):
    """CONNECTED_PAPERS_API_KEY is required but not set."""

    def __init__(self, env_var: str = "CONNECTED_PAPERS_API_KEY"):
        super().__init__(f"{env_var} environment variable is required")
        self.env_var = env_var
