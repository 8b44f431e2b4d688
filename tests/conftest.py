import json
from dataclasses import dataclass
from typing import List

import pytest

from bigquery_rest.base import BigQueryClient
from bigquery_rest.clients.interface import HTTPClientInterface


AUTHENTICATION_TOKEN = 'TEST_TOKEN_123'
PROJECT_ID = 'id-1234'
DATASET_ID = 'dataset_name'
TABLE_NAME = 'table_name'


@dataclass
class SampleRow:
    testName: str
    testVal: str
    testArray: List[str]
    testInt: int


@dataclass
class QueryRow:
    testName: str
    testVal: str
    testArray: List[str]


class MockHTTPClient(HTTPClientInterface):
    """
    Records every post and answers it with a canned (body, response, error) triple.
    """

    def __init__(self, body=None, response=None, error=None):
        self.result = (body, response, error)
        self.calls = []

    def post(self, url, payload, headers, completion_handler):
        self.calls.append({'url': url, 'payload': payload, 'headers': headers})
        completion_handler(*self.result)


@pytest.fixture
def sample_rows():
    return [
        SampleRow(testName='name', testVal='another', testArray=['x', 'y'], testInt=1),
        SampleRow(testName='two', testVal='val', testArray=['z', 'the'], testInt=53),
    ]


@pytest.fixture
def bigquery_error_resource():
    return {
        'reason': 'bla',
        'location': 'line 1',
        'debugInfo': 'test',
        'message': 'a message',
    }


@pytest.fixture
def insert_response_body(bigquery_error_resource):
    return json.dumps({
        'kind': 'bigquery#tableDataInsertAllResponse',
        'insertErrors': [
            {
                'index': 1,
                'errors': [bigquery_error_resource],
            },
        ],
    }).encode('utf-8')


@pytest.fixture
def query_response_resource(bigquery_error_resource):
    return {
        'kind': 'bigquery#queryResponse',
        'schema': {
            'fields': [
                {'name': 'testName', 'type': 'STRING', 'mode': 'REQUIRED'},
                {'name': 'testVal', 'type': 'STRING', 'mode': 'NULLABLE'},
                {'name': 'testArray', 'type': 'STRING', 'mode': 'REPEATED'},
            ],
        },
        'jobReference': {'projectId': PROJECT_ID, 'jobId': 'job_123', 'location': 'US'},
        'totalRows': '3',
        'rows': [
            {'f': [{'v': 'a name'}, {'v': 'val'}, {'v': [{'v': 'test'}]}]},
            {'f': [{'v': 'another name with a longer value'}, {'v': 'x'}, {'v': [{'v': 'xyz'}, {'v': 'x'}]}]},
            {'f': [{'v': 'name1'}, {'v': 'y'}, {'v': []}]},
        ],
        'totalBytesProcessed': '120',
        'jobComplete': True,
        'cacheHit': False,
        'errors': [bigquery_error_resource],
    }


@pytest.fixture
def query_response_body(query_response_resource):
    return json.dumps(query_response_resource).encode('utf-8')


@pytest.fixture
def mock_http_client_factory():
    def _factory(body=None, response=None, error=None):
        return MockHTTPClient(body=body, response=response, error=error)
    return _factory


@pytest.fixture
def bigquery_client_factory(mock_http_client_factory):
    def _factory(body=None, response=None, error=None):
        http_client = mock_http_client_factory(body=body, response=response, error=error)
        client = BigQueryClient(
            authentication_token=AUTHENTICATION_TOKEN,
            project_id=PROJECT_ID,
            dataset_id=DATASET_ID,
            table_name=TABLE_NAME,
            client=http_client,
        )
        return client, http_client
    return _factory
