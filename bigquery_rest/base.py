import logging
from typing import Any, Callable, Iterable, Optional

from bigquery_rest.auth import BigQueryAuthProvider
from bigquery_rest.clients.interface import HTTPClientInterface
from bigquery_rest.clients.requests_client import RequestsHTTPClient
from bigquery_rest.constants import INSERT_URL_TEMPLATE, QUERY_URL_TEMPLATE
from bigquery_rest.decoders import decode_insert_response, decode_query_response
from bigquery_rest.errors import BigQueryAuthError, BigQueryClientError, BigQueryEmptyResponseError
from bigquery_rest.models import AuthResponse, InsertResponse, QueryCallResponse
from bigquery_rest.payloads import build_insert_payload, build_query_payload, serialize_payload

logger = logging.getLogger(__name__)


class BigQueryClient:
    """
    Streams rows into a BigQuery table and runs queries through the BigQuery REST API.

    Every call issues a single POST and calls its completion handler exactly once, with
    either the decoded response or the error. Nothing is retried and page tokens are
    never followed.
    """

    def __init__(self, authentication_token: str, project_id: str, dataset_id: str,
                 table_name: str, client: Optional[HTTPClientInterface] = None):
        """
        Initializes the BigQueryClient.

        Args:
            authentication_token (str): The OAuth2 access token sent as a bearer token.
            project_id (str): The Google Cloud project id.
            dataset_id (str): The dataset holding the table rows are inserted into.
            table_name (str): The table rows are inserted into.
            client (HTTPClientInterface, optional): The HTTP client used to send requests.
                A RequestsHTTPClient is used if not provided.
        """
        assert authentication_token, 'Authentication token is not defined'
        assert project_id, 'Project id is not defined'
        self.authentication_token = authentication_token
        self.client = client if client is not None else RequestsHTTPClient()
        self.insert_url = INSERT_URL_TEMPLATE.format(
            project_id=project_id, dataset_id=dataset_id, table_name=table_name
        )
        self.query_url = QUERY_URL_TEMPLATE.format(project_id=project_id)

    @classmethod
    def from_service_account(cls, project_id: str, dataset_id: str, table_name: str,
                             credentials: Optional[str] = None,
                             client: Optional[HTTPClientInterface] = None) -> 'BigQueryClient':
        """
        Creates a BigQueryClient authenticated with a service account key.

        Args:
            credentials (str, optional): The path to the service account credentials file.
                Defaults to credentials.json in the current working directory.

        Raises:
            BigQueryAuthError: If no access token could be obtained.
        """
        responses = []
        BigQueryAuthProvider(credentials).get_authentication_token(responses.append)
        auth_response: AuthResponse = responses[0]
        if not auth_response.ok:
            raise BigQueryAuthError(f'Unable to get an authentication token: {auth_response.error}')
        return cls(auth_response.token, project_id, dataset_id, table_name, client=client)

    @property
    def headers(self):
        return {'Authorization': f'Bearer {self.authentication_token}'}

    def insert(self, rows: Iterable[Any], completion_handler: Callable[[InsertResponse], None],
               skip_invalid_rows: bool = False, ignore_unknown_values: bool = False) -> None:
        """
        Streams rows into the table.

        Rows that BigQuery rejects don't make the call fail: they're listed in the
        `insert_errors` of the delivered response, by position in `rows`.

        Args:
            rows: Dicts, dataclass instances or other JSON serializable rows.
            completion_handler: Called once with an InsertResponse.
            skip_invalid_rows: Insert the valid rows even if some rows are invalid.
            ignore_unknown_values: Accept values that don't match the table schema.

        Raises:
            BigQueryEncodeError: If the rows can't be serialized. Nothing is sent in that case.
        """
        rows = list(rows)
        payload = serialize_payload(build_insert_payload(
            rows, skip_invalid_rows=skip_invalid_rows, ignore_unknown_values=ignore_unknown_values
        ))
        logger.info(f'Inserting {len(rows)} rows into {self.insert_url}')

        def handle_response(body, response, error):
            if error is not None:
                logger.error(f'Error inserting rows: {error}')
                completion_handler(InsertResponse(error=error))
                return
            try:
                insert_response = decode_insert_response(self._require_body(body))
            except BigQueryClientError as e:
                logger.error(f'Error decoding insert response: {e}')
                completion_handler(InsertResponse(error=e))
                return
            if insert_response.insert_errors:
                logger.warning(f'{len(insert_response.insert_errors)} rows were rejected by BigQuery')
            completion_handler(InsertResponse(insert_response=insert_response))

        self.client.post(self.insert_url, payload, self.headers, handle_response)

    def query(self, query: str, completion_handler: Callable[[QueryCallResponse], None],
              row_type=dict) -> None:
        """
        Runs a standard SQL query.

        Args:
            query: The query to run.
            completion_handler: Called once with a QueryCallResponse.
            row_type: The type result rows are rehydrated into. Defaults to dict; a pydantic
                model, dataclass or class must accept exactly the fields of the result schema.
        """
        payload = serialize_payload(build_query_payload(query))
        logger.info(f'Running query against {self.query_url}')

        def handle_response(body, response, error):
            if error is not None:
                logger.error(f'Error running query: {error}')
                completion_handler(QueryCallResponse(error=error))
                return
            try:
                query_response = decode_query_response(self._require_body(body), row_type)
            except BigQueryClientError as e:
                logger.error(f'Error decoding query response: {e}')
                completion_handler(QueryCallResponse(error=e))
                return
            completion_handler(QueryCallResponse(query_response=query_response))

        self.client.post(self.query_url, payload, self.headers, handle_response)

    @staticmethod
    def _require_body(body):
        if not body:
            raise BigQueryEmptyResponseError('Response is empty')
        return body
