import pytest

from bigquery_rest.errors import BigQueryDecodeError
from bigquery_rest.models import (
    BigQueryError,
    InsertError,
    InsertResponse,
    NestedValue,
    QueryCallResponse,
    QueryHTTPResponse,
    SchemaValue,
    Value,
)


class TestBigQueryError:
    def test_round_trip(self, bigquery_error_resource):
        error = BigQueryError.from_api_repr(bigquery_error_resource)

        assert error.to_api_repr() == bigquery_error_resource
        assert BigQueryError.from_api_repr(error.to_api_repr()) == error

    def test_missing_key(self, bigquery_error_resource):
        del bigquery_error_resource['debugInfo']

        with pytest.raises(BigQueryDecodeError) as exc_info:
            BigQueryError.from_api_repr(bigquery_error_resource)
        assert exc_info.value.kind == BigQueryDecodeError.KEY_NOT_FOUND
        assert exc_info.value.key == 'debugInfo'


class TestInsertError:
    def test_index_must_be_an_integer(self):
        with pytest.raises(BigQueryDecodeError) as exc_info:
            InsertError.from_api_repr({'index': '1', 'errors': []})
        assert exc_info.value.kind == BigQueryDecodeError.TYPE_MISMATCH

    def test_index_rejects_booleans(self):
        with pytest.raises(BigQueryDecodeError):
            InsertError.from_api_repr({'index': True, 'errors': []})


class TestNestedValue:
    def test_repeating(self):
        value = NestedValue.from_api_repr({'v': [{'v': 'a'}, {'v': None}, {}]})

        assert value.repeating
        assert value.value == [Value(v='a'), Value(v=None), Value(v=None)]
        assert value.to_python() == ['a', None, None]

    def test_empty_list_is_repeating(self):
        value = NestedValue.from_api_repr({'v': []})

        assert value.repeating
        assert value.to_python() == []

    def test_non_repeating(self):
        value = NestedValue.from_api_repr({'v': '42'})

        assert not value.repeating
        assert value.to_python() == '42'

    def test_null_is_non_repeating(self):
        value = NestedValue.from_api_repr({'v': None})

        assert not value.repeating
        assert value.to_python() is None

    @pytest.mark.parametrize('resource', [
        {},
        {'v': 42},
        {'v': {'f': []}},
        {'v': [{'v': {'f': []}}]},
        {'v': ['a']},
    ])
    def test_missing_value(self, resource):
        with pytest.raises(BigQueryDecodeError) as exc_info:
            NestedValue.from_api_repr(resource)
        assert exc_info.value.kind == BigQueryDecodeError.MISSING_VALUE


class TestSchemaValue:
    def test_mode_defaults_to_nullable(self):
        assert SchemaValue.from_api_repr({'name': 'n', 'type': 'STRING'}).mode == 'NULLABLE'

    def test_mode_is_kept(self):
        assert SchemaValue.from_api_repr({'name': 'n', 'type': 'STRING', 'mode': 'REPEATED'}).mode == 'REPEATED'


class TestQueryHTTPResponse:
    def test_optional_keys_decode_as_none(self):
        response = QueryHTTPResponse.from_api_repr({'totalBytesProcessed': '0', 'pageToken': None})

        assert response == QueryHTTPResponse(total_bytes_processed='0')

    def test_total_rows(self, query_response_resource):
        response = QueryHTTPResponse.from_api_repr(query_response_resource)

        assert response.total_rows == '3'
        assert len(response.rows) == 3
        assert [field.name for field in response.schema_.fields] == ['testName', 'testVal', 'testArray']


class TestResponseVariants:
    def test_ok(self):
        assert InsertResponse(insert_response=None).ok
        assert not InsertResponse(error=ValueError('x')).ok
        assert not QueryCallResponse(error=ValueError('x')).ok
