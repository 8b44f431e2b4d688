"""
Models for the BigQuery insertAll and jobs.query responses.

Wire resources are validated with pydantic. Fields are snake_case and read from the
camelCase keys of the API through aliases; `from_api_repr` turns validation failures
into `BigQueryDecodeError`.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

from bigquery_rest.constants import NULLABLE_MODE
from bigquery_rest.errors import BigQueryDecodeError

# Marks an attempted NestedValue shape that didn't match
_NO_MATCH = object()

_DECODE_ERROR_KINDS = {
    'missing': BigQueryDecodeError.KEY_NOT_FOUND,
    'extra_forbidden': BigQueryDecodeError.UNKNOWN_KEY,
    'missing_value': BigQueryDecodeError.MISSING_VALUE,
}


def decode_error_from_validation(error: ValidationError, name: str) -> BigQueryDecodeError:
    """
    Converts the first error of a pydantic ValidationError into a BigQueryDecodeError.

    `missing` errors become `key_not_found`, `*_type` errors `type_mismatch`, and the key
    is the innermost field name of the error location.
    """
    details = error.errors()[0]
    error_type = details['type']
    if error_type in _DECODE_ERROR_KINDS:
        kind = _DECODE_ERROR_KINDS[error_type]
    elif error_type.endswith('_type'):
        kind = BigQueryDecodeError.TYPE_MISMATCH
    else:
        kind = BigQueryDecodeError.DATA_CORRUPTED
    keys = [part for part in details['loc'] if isinstance(part, str)]
    key = keys[-1] if keys else None
    location = '.'.join(str(part) for part in details['loc'])
    return BigQueryDecodeError(
        f'Invalid {name}{f" at {location}" if location else ""}: {details["msg"]}',
        kind=kind,
        key=key,
    )


class APIModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_api_repr(cls, resource: Any):
        """
        Validates a decoded JSON resource.

        Raises:
            BigQueryDecodeError: If the resource doesn't have the expected shape.
        """
        try:
            return cls.model_validate(resource)
        except ValidationError as e:
            raise decode_error_from_validation(e, cls.__name__) from e


class BigQueryError(APIModel):
    """An error reported by the BigQuery API."""
    reason: StrictStr
    location: StrictStr
    debug_info: StrictStr = Field(..., alias='debugInfo')
    message: StrictStr

    def to_api_repr(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class InsertError(APIModel):
    """The errors for the submitted row at position `index`."""
    index: StrictInt
    errors: List[BigQueryError]


class InsertHTTPResponse(APIModel):
    insert_errors: Optional[List[InsertError]] = Field(None, alias='insertErrors')


class Value(APIModel):
    """A single query result cell. BigQuery sends every cell as a string."""
    v: Optional[StrictStr] = None


def _match_repeating(raw: Any) -> Any:
    if not isinstance(raw, list):
        return _NO_MATCH
    cells = []
    for item in raw:
        if not isinstance(item, dict):
            return _NO_MATCH
        value = item.get('v')
        if value is not None and not isinstance(value, str):
            return _NO_MATCH
        cells.append(Value(v=value))
    return cells


def _match_non_repeating(raw: Any) -> Any:
    if raw is None or isinstance(raw, str):
        return raw
    return _NO_MATCH


class NestedValue(APIModel):
    """
    One field of one query result row.

    Repeated fields arrive as `{"v": [{"v": "a"}, ...]}` and everything else as
    `{"v": "a"}` or `{"v": null}`. `value` holds a list of `Value` cells when
    `repeating` is set and an optional string otherwise.
    """
    repeating: bool
    value: Union[List[Value], Optional[StrictStr]]

    @model_validator(mode='before')
    @classmethod
    def from_wire_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict) or 'repeating' in data:
            return data
        raw = data.get('v', _NO_MATCH)
        cells = _match_repeating(raw)
        if cells is not _NO_MATCH:
            return {'repeating': True, 'value': cells}
        value = _match_non_repeating(raw)
        if value is not _NO_MATCH:
            return {'repeating': False, 'value': value}
        raise PydanticCustomError('missing_value', 'Row field is neither a repeating nor a non-repeating value')

    def to_python(self) -> Union[List[Optional[str]], Optional[str]]:
        """Returns the cell strings of a repeating field, or the single string otherwise."""
        if self.repeating:
            return [cell.v for cell in self.value]
        return self.value


class SchemaValue(APIModel):
    name: StrictStr
    type: StrictStr
    mode: StrictStr = NULLABLE_MODE

    @field_validator('mode', mode='before')
    @classmethod
    def default_mode(cls, value: Any) -> Any:
        # BigQuery leaves out the mode of nullable columns
        return NULLABLE_MODE if value is None else value


class BigQuerySchema(APIModel):
    fields: List[SchemaValue]


class BigQueryRow(APIModel):
    f: List[NestedValue]


class QueryHTTPResponse(APIModel):
    total_bytes_processed: StrictStr = Field(..., alias='totalBytesProcessed')
    total_rows: Optional[StrictStr] = Field(None, alias='totalRows')
    schema_: Optional[BigQuerySchema] = Field(None, alias='schema')
    rows: Optional[List[BigQueryRow]] = None
    page_token: Optional[StrictStr] = Field(None, alias='pageToken')
    errors: Optional[List[BigQueryError]] = None


class QueryResponse(BaseModel):
    """Query result with rows rehydrated into the caller's row type."""
    model_config = ConfigDict(frozen=True)

    total_bytes_processed: str
    rows: Optional[List[Any]] = None
    page_token: Optional[str] = None
    errors: Optional[List[BigQueryError]] = None


@dataclass(frozen=True)
class InsertResponse:
    """
    Outcome of `BigQueryClient.insert`: exactly one of `insert_response` and `error` is set.
    """
    insert_response: Optional[InsertHTTPResponse] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class QueryCallResponse:
    """
    Outcome of `BigQueryClient.query`: exactly one of `query_response` and `error` is set.
    """
    query_response: Optional[QueryResponse] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class AuthResponse:
    token: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None
