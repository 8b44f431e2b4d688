"""
Constants for the BigQuery REST client package.
"""

BIGQUERY_API_URL = 'https://www.googleapis.com/bigquery/v2'

INSERT_URL_TEMPLATE = BIGQUERY_API_URL + '/projects/{project_id}/datasets/{dataset_id}/tables/{table_name}/insertAll'
QUERY_URL_TEMPLATE = BIGQUERY_API_URL + '/projects/{project_id}/queries'

# Request kinds expected by the insertAll and jobs.query endpoints
INSERT_REQUEST_KIND = 'bigquery#tableDataInsertAllRequest'
QUERY_REQUEST_KIND = 'bigquery#queryRequest'

CONTENT_TYPE = 'application/json'

BIGQUERY_SCOPES = [
    'https://www.googleapis.com/auth/bigquery',
    'https://www.googleapis.com/auth/bigquery.insertdata',
]

# Service account key looked up in the working directory when no path is given
CREDENTIALS_FILE_NAME = 'credentials.json'

NULLABLE_MODE = 'NULLABLE'

# Datetimes in inserted rows are sent as UTC strings in this format
BIGQUERY_TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
