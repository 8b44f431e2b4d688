import dataclasses
import datetime
from decimal import Decimal
from uuid import UUID

import pytz
from pydantic import BaseModel

from bigquery_rest.constants import BIGQUERY_TIMESTAMP_FORMAT


def format_timestamp(value):
    """Formats a datetime row value the way BigQuery parses TIMESTAMP and DATETIME columns, in UTC."""
    # Rows carry no timezone of their own, naive values are taken as UTC
    utc_value = pytz.UTC.localize(value) if value.tzinfo is None else value.astimezone(pytz.UTC)
    return utc_value.strftime(BIGQUERY_TIMESTAMP_FORMAT)


def encode_value(value):
    """
    `default` hook for json.dumps. Converts values json can't serialize on its own
    into BigQuery compliant ones: dataclass and pydantic rows become dicts, datetimes become UTC
    strings, dates/times become ISO strings, UUIDs and Decimals become strings.

    Raises:
        TypeError: If the value has no BigQuery representation.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    # datetime is a subclass of date, so it has to be checked first
    if isinstance(value, datetime.datetime):
        return format_timestamp(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    raise TypeError(f'Object of type {type(value).__name__} is not JSON serializable')
