"""
JSON schemas, display names and descriptions derived from botocore shapes.

Botocore ships the AWS API definitions as service models; every block's
configuration and output schema is built from the operation's input and
output shapes instead of being written out by hand.
"""
import base64
import binascii
import re
from typing import Any, Dict, Optional, Tuple

from bs4 import BeautifulSoup
from botocore.model import Shape
from dateutil.parser import parse

from utils.exceptions import ValidationError

SCALAR_TYPES = {
    'string': 'string',
    'character': 'string',
    'blob': 'string',
    'timestamp': 'string',
    'boolean': 'boolean',
    'integer': 'integer',
    'long': 'integer',
    'short': 'integer',
    'byte': 'integer',
    'float': 'number',
    'double': 'number',
    'bigInteger': 'integer',
    'bigDecimal': 'number',
}

# Shorthand used for scalar configuration fields
FIELD_TYPES = {
    'string': 'string',
    'integer': 'number',
    'number': 'number',
    'boolean': 'boolean',
}

_WORD_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')
_FIRST_SENTENCE = re.compile(r'^(.+?[.!?])(?:\s|$)')
_WHITESPACE = re.compile(r'\s+')


def display_name(name: str) -> str:
    """
    Turn an API name into a readable title.

    "DescribeDBProxies" => "Describe DB Proxies"
    "ListObjectsV2" => "List Objects V2"
    """
    return _WORD_BOUNDARY.sub(' ', name)


def summarize_documentation(documentation: Optional[str]) -> str:
    """Strip HTML from botocore documentation and keep the first sentence."""
    if not documentation:
        return ''

    text = BeautifulSoup(documentation, 'html.parser').get_text(' ', strip=True)
    text = _WHITESPACE.sub(' ', text).strip()
    match = _FIRST_SENTENCE.match(text)
    return match.group(1) if match else text


def shape_to_schema(shape: Optional[Shape], _stack: Tuple[str, ...] = ()) -> Dict[str, Any]:
    """
    Convert a botocore shape into a JSON schema.

    Recursive shapes (e.g. DynamoDB AttributeValue) are cut at the point
    where a shape reappears inside itself.

    Args:
        shape: botocore shape, or None for operations without input/output

    Returns:
        JSON schema dict
    """
    if shape is None:
        return {'type': 'object', 'properties': {}}

    type_name = shape.type_name

    if type_name == 'structure':
        if shape.name in _stack:
            return {'type': 'object'}
        stack = _stack + (shape.name,)
        schema = {
            'type': 'object',
            'properties': {
                member_name: shape_to_schema(member_shape, stack)
                for member_name, member_shape in shape.members.items()
            },
        }
        required = list(shape.required_members)
        if required:
            schema['required'] = required
        return schema

    if type_name == 'list':
        if shape.name in _stack:
            return {'type': 'array'}
        return {
            'type': 'array',
            'items': shape_to_schema(shape.member, _stack + (shape.name,)),
        }

    if type_name == 'map':
        if shape.name in _stack:
            return {'type': 'object'}
        return {
            'type': 'object',
            'additionalProperties': shape_to_schema(
                shape.value, _stack + (shape.name,)
            ),
        }

    schema = {'type': SCALAR_TYPES.get(type_name, 'string')}
    if type_name == 'timestamp':
        schema['format'] = 'date-time'
    elif type_name == 'blob':
        schema['contentEncoding'] = 'base64'
    enum = getattr(shape, 'enum', None)
    if enum:
        schema['enum'] = list(enum)
    return schema


def field_type(schema: Dict[str, Any]) -> Any:
    """Scalar shorthand for a configuration field, or the full schema."""
    shorthand = FIELD_TYPES.get(schema.get('type'))
    if shorthand and set(schema) == {'type'}:
        return shorthand
    return schema


def coerce_params(shape: Optional[Shape], value: Any, path: str = '') -> Any:
    """
    Turn JSON input into the Python values botocore expects.

    Timestamp strings are parsed into datetimes and blob strings are
    base64-decoded into bytes. Everything else is returned unchanged.

    Raises:
        ValidationError: If a timestamp or blob string cannot be decoded
    """
    if shape is None or value is None:
        return value

    type_name = shape.type_name

    if type_name == 'timestamp' and isinstance(value, str):
        try:
            return parse(value)
        except (ValueError, OverflowError) as e:
            raise ValidationError(
                f'Invalid timestamp for {path}: {str(e)}', field=path, value=value
            )
    if type_name == 'blob' and isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValidationError(
                f'Invalid base64 encoding for {path}: {str(e)}', field=path, value=value
            )
    if type_name == 'structure' and isinstance(value, dict):
        return {
            key: coerce_params(shape.members.get(key), item, _join(path, key))
            for key, item in value.items()
        }
    if type_name == 'list' and isinstance(value, list):
        return [
            coerce_params(shape.member, item, _join(path, index))
            for index, item in enumerate(value)
        ]
    if type_name == 'map' and isinstance(value, dict):
        return {
            key: coerce_params(shape.value, item, _join(path, key))
            for key, item in value.items()
        }
    return value


def _join(path: str, part: Any) -> str:
    return f'{path}.{part}' if path else str(part)
