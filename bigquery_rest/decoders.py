"""
Decoders for insertAll and jobs.query response bodies.

Query results come back schema-driven and type-erased: every cell is a string and each
row is a positional list of cells. Rows are first flattened into dicts keyed by schema
field name, then rehydrated into the caller's row type.
"""
import inspect
import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from bigquery_rest.errors import BigQueryDecodeError
from bigquery_rest.models import (
    BigQueryRow,
    BigQuerySchema,
    InsertHTTPResponse,
    QueryHTTPResponse,
    QueryResponse,
    decode_error_from_validation,
)

logger = logging.getLogger(__name__)


def _load_json(body: bytes) -> Any:
    try:
        resource = json.loads(body)
    except (TypeError, ValueError) as e:
        raise BigQueryDecodeError(f'Response body is not valid JSON: {e}') from e
    # Requests BigQuery refuses as a whole (bad token, unknown table, invalid query)
    # come back as {"error": {"code": ..., "message": ...}} with an error status
    if isinstance(resource, dict) and 'error' in resource:
        error = resource['error']
        if isinstance(error, dict):
            description = f'{error.get("code", "")} {error.get("message", "")}'.strip()
        else:
            description = str(error)
        raise BigQueryDecodeError(f'BigQuery returned an error: {description}', kind=BigQueryDecodeError.API_ERROR)
    return resource


def decode_insert_response(body: bytes) -> InsertHTTPResponse:
    """
    Decodes an insertAll response body.

    A populated `insert_errors` list is still a successful decode; the caller decides what
    to do with the rows that failed.

    Raises:
        BigQueryDecodeError: If the body is not JSON, is an API error, or doesn't have the
            insertAll response shape.
    """
    return InsertHTTPResponse.from_api_repr(_load_json(body))


def flatten_rows(schema: Optional[BigQuerySchema], rows: Optional[List[BigQueryRow]]) -> Optional[List[Dict[str, Any]]]:
    """
    Converts positional query rows into dicts keyed by schema field name.

    Repeating fields become lists of cell strings (null cells are kept as None), all other
    fields their optional string. Returns None when either the schema or the rows are missing.

    Raises:
        BigQueryDecodeError: If a row's cell count doesn't match the schema.
    """
    if schema is None or rows is None:
        return None
    flattened = []
    for row_index, row in enumerate(rows):
        if len(row.f) != len(schema.fields):
            raise BigQueryDecodeError(
                f'Row {row_index} has {len(row.f)} values but the schema has {len(schema.fields)} fields.',
                kind=BigQueryDecodeError.SCHEMA_MISMATCH,
            )
        flattened.append({field.name: value.to_python() for field, value in zip(schema.fields, row.f)})
    return flattened


def _parameters(row_type) -> Optional[Dict[str, inspect.Parameter]]:
    try:
        return dict(inspect.signature(row_type).parameters)
    except (TypeError, ValueError):
        # No introspectable signature, construction alone decides
        return None


def _check_keys(row: Dict[str, Any], row_type) -> None:
    parameters = _parameters(row_type)
    if parameters is None:
        return
    name = getattr(row_type, '__name__', repr(row_type))
    for parameter in parameters.values():
        if (parameter.kind in (parameter.POSITIONAL_OR_KEYWORD, parameter.KEYWORD_ONLY)
                and parameter.default is parameter.empty and parameter.name not in row):
            raise BigQueryDecodeError(
                f'Key "{parameter.name}" of {name} not found in query results.',
                kind=BigQueryDecodeError.KEY_NOT_FOUND,
                key=parameter.name,
            )
    if any(parameter.kind == parameter.VAR_KEYWORD for parameter in parameters.values()):
        return
    for key in row:
        parameter = parameters.get(key)
        if parameter is None or parameter.kind not in (parameter.POSITIONAL_OR_KEYWORD, parameter.KEYWORD_ONLY):
            raise BigQueryDecodeError(
                f'Query results have a field "{key}" that {name} does not define.',
                kind=BigQueryDecodeError.UNKNOWN_KEY,
                key=key,
            )


def _rehydrate_row(row: Dict[str, Any], row_type) -> Any:
    if isinstance(row_type, type) and issubclass(row_type, BaseModel):
        try:
            return row_type.model_validate(row)
        except ValidationError as e:
            raise decode_error_from_validation(e, row_type.__name__) from e
    _check_keys(row, row_type)
    try:
        return row_type(**row)
    except TypeError as e:
        raise BigQueryDecodeError(
            f'Unable to build {getattr(row_type, "__name__", row_type)} from query results: {e}',
            kind=BigQueryDecodeError.TYPE_MISMATCH,
        ) from e
    except ValueError as e:
        raise BigQueryDecodeError(
            f'{getattr(row_type, "__name__", row_type)} rejected a query result row: {e}',
            kind=BigQueryDecodeError.DATA_CORRUPTED,
        ) from e


def rehydrate_rows(rows: List[Dict[str, Any]], row_type=dict) -> List[Any]:
    """
    Converts flattened query rows into instances of `row_type`.

    Field names must match the schema field names exactly (case-sensitive). A field of
    `row_type` missing from the results is a `key_not_found` error, a result field that
    `row_type` doesn't accept an `unknown_key` one.

    Args:
        rows: Rows as returned by `flatten_rows`.
        row_type: `dict` to keep the rows as dicts, a pydantic model, a dataclass, or any
            callable that accepts the row's fields as keyword arguments.

    Raises:
        BigQueryDecodeError: If a row doesn't fit `row_type`, or `row_type` rejects it.
    """
    if row_type is dict:
        return rows
    return [_rehydrate_row(row, row_type) for row in rows]


def decode_query_response(body: bytes, row_type=dict) -> QueryResponse:
    """
    Decodes a jobs.query response body, rehydrating its rows into `row_type`.

    Responses without a schema or without rows (no results, or errors only) decode with
    `rows` set to None. Errors, page token and processed bytes are passed through as is.

    Raises:
        BigQueryDecodeError: If the body is an API error or doesn't have the query response
            shape, or its rows don't fit `row_type`.
    """
    response = QueryHTTPResponse.from_api_repr(_load_json(body))
    flattened = flatten_rows(response.schema_, response.rows)
    rows = rehydrate_rows(flattened, row_type) if flattened is not None else None
    logger.debug(f'Decoded query response with {len(rows) if rows is not None else 0} rows')
    return QueryResponse(
        rows=rows,
        errors=response.errors,
        page_token=response.page_token,
        total_bytes_processed=response.total_bytes_processed,
    )
