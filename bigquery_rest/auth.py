"""
Service account authentication for the BigQuery REST API
"""
import logging
import os
from typing import Callable, Optional

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from bigquery_rest.constants import BIGQUERY_SCOPES, CREDENTIALS_FILE_NAME
from bigquery_rest.errors import BigQueryAuthError
from bigquery_rest.models import AuthResponse

logger = logging.getLogger(__name__)


def default_credentials_path() -> str:
    return os.path.join(os.getcwd(), CREDENTIALS_FILE_NAME)


class BigQueryAuthProvider:
    """
    Gets access tokens for a service account, scoped to BigQuery.
    """
    scopes = BIGQUERY_SCOPES

    def __init__(self, credentials: Optional[str] = None):
        """
        Initializes the BigQueryAuthProvider.

        Args:
            credentials (str, optional): The path to the service account credentials file. If not
                provided, credentials.json in the current working directory is used.

        Raises:
            BigQueryAuthError: If the credentials file can't be read or isn't a service account key.
        """
        self.credentials_path = credentials or default_credentials_path()
        try:
            self.credentials = service_account.Credentials.from_service_account_file(
                self.credentials_path, scopes=self.scopes
            )
        except (OSError, ValueError) as e:
            logger.error(f'Error loading service account credentials from {self.credentials_path}: {e}')
            raise BigQueryAuthError(f'Unable to load credentials from {self.credentials_path}: {e}') from e

    def get_authentication_token(self, completion_handler: Callable[[AuthResponse], None]) -> None:
        """
        Gets an access token to be used in API calls.

        Args:
            completion_handler: Called once with an AuthResponse holding either the token or
                the error that prevented getting one.
        """
        try:
            self.credentials.refresh(Request())
        except google.auth.exceptions.GoogleAuthError as e:
            logger.error(f'Error refreshing service account token: {e}')
            completion_handler(AuthResponse(error=e))
            return
        completion_handler(AuthResponse(token=self.credentials.token))
