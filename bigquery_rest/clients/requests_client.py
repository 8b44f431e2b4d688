"""
HTTP client implementation using requests
"""
import logging
from typing import Dict, Optional, Tuple, Union

import requests

from bigquery_rest.clients.interface import CompletionHandler, HTTPClientInterface
from bigquery_rest.constants import CONTENT_TYPE


logger = logging.getLogger(__name__)


class RequestsHTTPClient(HTTPClientInterface):
    """
    Implementation of HTTPClientInterface that uses a requests Session.
    Requests are made synchronously, so the completion handler runs before `post` returns.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: Optional[Union[float, Tuple[float, float]]] = None):
        """
        Initialize a RequestsHTTPClient.

        Args:
            session: The session to send requests with. A new one is created if not provided.
            timeout: Passed on to requests. No timeout by default.
        """
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def post(self, url: str, payload: bytes, headers: Dict[str, str],
             completion_handler: CompletionHandler) -> None:
        request_headers = {'Content-Type': CONTENT_TYPE}
        request_headers.update(headers)
        try:
            response = self.session.post(url, data=payload, headers=request_headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f'Error posting to {url}: {e}')
            completion_handler(None, None, e)
            return
        if not response.ok:
            # BigQuery describes the failure in the body, so it is still handed on
            logger.warning(f'Got HTTP {response.status_code} from {url}')
        completion_handler(response.content, response, None)
