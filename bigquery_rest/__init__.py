from bigquery_rest.auth import BigQueryAuthProvider
from bigquery_rest.base import BigQueryClient
from bigquery_rest.clients.interface import HTTPClientInterface
from bigquery_rest.clients.requests_client import RequestsHTTPClient
from bigquery_rest.errors import (
    BigQueryAuthError,
    BigQueryClientError,
    BigQueryDecodeError,
    BigQueryEmptyResponseError,
    BigQueryEncodeError,
)
from bigquery_rest.models import (
    AuthResponse,
    BigQueryError,
    InsertError,
    InsertHTTPResponse,
    InsertResponse,
    QueryCallResponse,
    QueryResponse,
)
