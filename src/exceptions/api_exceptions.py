from typing import Any


class APIClientError(Exception):
    """Basic exception for all errors of the API clients"""


class APIConnectionError(APIClientError):
    """Connection to the API could not be established"""


class APITimeoutError(APIClientError):
    """The API did not answer in time"""


class APIRateLimitError(APIClientError):
    """The API answered with 429"""


class APIResponseError(APIClientError):
    """The API answered with a body that cannot be used"""


class APISessionError(APIClientError):
    """The HTTP session was closed under the request"""


class APISSLError(APIClientError):
    """TLS handshake with the API failed"""


class APIAuthError(APIClientError):
    """Login to the points API was rejected"""


class APIStatusError(APIClientError):
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class APIClientSideError(APIStatusError):
    """4xx answer"""


class APIServerSideError(APIStatusError):
    """5xx answer or retries exhausted"""
