"""
Request payloads for the insertAll and jobs.query endpoints.
"""
import json
from typing import Any, Dict, Iterable

from bigquery_rest.constants import INSERT_REQUEST_KIND, QUERY_REQUEST_KIND
from bigquery_rest.errors import BigQueryEncodeError
from bigquery_rest.helpers import encode_value


def build_insert_payload(rows: Iterable[Any], skip_invalid_rows: bool = False,
                         ignore_unknown_values: bool = False) -> Dict[str, Any]:
    """
    Builds the insertAll request body, wrapping each row in its {"json": row} envelope.

    Args:
        rows: The rows to insert, in order. Rows are not validated here.
        skip_invalid_rows: Insert the valid rows of a request that contains invalid ones.
        ignore_unknown_values: Accept rows with values that don't match the table schema.

    Returns:
        The request body as a dict.
    """
    return {
        'kind': INSERT_REQUEST_KIND,
        'skipInvalidRows': skip_invalid_rows,
        'ignoreUnknownValues': ignore_unknown_values,
        'rows': [{'json': row} for row in rows],
    }


def build_query_payload(query: str) -> Dict[str, Any]:
    # Standard SQL only
    return {
        'kind': QUERY_REQUEST_KIND,
        'query': query,
        'useLegacySql': False,
    }


def serialize_payload(payload: Dict[str, Any]) -> bytes:
    """
    Serializes a request body to JSON bytes.

    Raises:
        BigQueryEncodeError: If a row holds a value with no JSON representation.
    """
    try:
        return json.dumps(payload, default=encode_value, allow_nan=False, separators=(',', ':')).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise BigQueryEncodeError(f'Unable to encode request payload: {e}') from e
