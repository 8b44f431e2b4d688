class BigQueryClientError(Exception):
    pass


class BigQueryEncodeError(BigQueryClientError):
    pass


class BigQueryDecodeError(BigQueryClientError):
    """
    Raised when a response body does not have the expected shape.

    Attributes:
        kind: One of the kind constants below.
        key: The offending key, when the failure concerns a single key.
    """
    DATA_CORRUPTED = 'data_corrupted'
    KEY_NOT_FOUND = 'key_not_found'
    TYPE_MISMATCH = 'type_mismatch'
    MISSING_VALUE = 'missing_value'
    SCHEMA_MISMATCH = 'schema_mismatch'
    UNKNOWN_KEY = 'unknown_key'
    API_ERROR = 'api_error'

    def __init__(self, message, kind=DATA_CORRUPTED, key=None):
        super().__init__(message)
        self.kind = kind
        self.key = key


class BigQueryEmptyResponseError(BigQueryClientError):
    pass


class BigQueryAuthError(BigQueryClientError):
    pass
