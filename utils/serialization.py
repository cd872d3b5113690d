"""
Conversion of SDK responses into plain JSON-compatible values.
"""
import base64
import datetime
from decimal import Decimal
from typing import Any, Dict

from botocore.response import StreamingBody

from logger_config import get_logger

logger = get_logger(__name__)

# Transport details added by botocore that are not part of any output shape
STRIPPED_KEYS = ('ResponseMetadata',)


def serialize_value(value: Any) -> Any:
    """
    Convert a single response value into a JSON-compatible value.

    Datetimes become ISO-8601 strings, Decimals become int or float, and
    binary values (bytes and streaming bodies) are base64-encoded.
    """
    if isinstance(value, dict):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(item) for item in value]
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, StreamingBody):
        return serialize_value(value.read())
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode('ascii')
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def serialize_response(response: Any) -> Dict[str, Any]:
    """
    Serialize a raw SDK response for emission.

    Args:
        response: The dict returned by a boto3 client method (or None)

    Returns:
        JSON-compatible dict without transport metadata; empty when the
        operation returned no body
    """
    if not response:
        return {}

    body = {
        key: value for key, value in response.items()
        if key not in STRIPPED_KEYS
    }
    logger.debug(f'Serializing response with keys: {sorted(body)}')
    return serialize_value(body)
