"""
Interfaces for HTTP clients
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

# Called once with (body, response, error)
CompletionHandler = Callable[[Optional[bytes], Optional[Any], Optional[BaseException]], None]


class HTTPClientInterface(ABC):
    """
    Interface for HTTP clients used by BigQueryClient.
    This defines the contract that all HTTP client implementations must follow.
    """

    @abstractmethod
    def post(self, url: str, payload: bytes, headers: Dict[str, str],
             completion_handler: CompletionHandler) -> None:
        """
        Posts a JSON payload.

        Implementations call `completion_handler` exactly once. `error` is only set when the
        exchange itself failed (network, DNS, connection reset); responses with an error
        status are delivered as a body, since BigQuery describes the failure in it.

        Args:
            url: The URL to post to.
            payload: The JSON encoded request body.
            headers: Extra request headers.
            completion_handler: Called with the response body, the response object and the
                transport error.
        """
        pass
