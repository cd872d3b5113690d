"""
Block definitions and catalogue lookups.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import botocore.session
from botocore import xform_name
from botocore.model import OperationModel, ServiceModel
from jsonschema import Draft7Validator
from more_itertools import map_reduce

from blocks.catalog import APPS
from blocks.schema import (
    display_name,
    field_type,
    shape_to_schema,
    summarize_documentation,
)
from logger_config import get_logger
from utils.exceptions import BlockNotFoundError, ValidationError

logger = get_logger(__name__)

REGION_FIELD = {
    'name': 'Region',
    'description': 'AWS region for this operation',
    'type': 'string',
    'required': True,
}

ASSUME_ROLE_ARN_FIELD = {
    'name': 'Assume Role ARN',
    'description': (
        'Optional IAM role ARN to assume before executing this operation. '
        'If provided, the block will use STS to assume this role and use '
        'the temporary credentials.'
    ),
    'type': 'string',
    'required': False,
}

_botocore_session = None
_service_models: Dict[str, ServiceModel] = {}


def get_botocore_session() -> botocore.session.Session:
    global _botocore_session
    if _botocore_session is None:
        _botocore_session = botocore.session.get_session()
    return _botocore_session


def get_service_model(service: str) -> ServiceModel:
    """Load (once) the botocore service model for a service."""
    if service not in _service_models:
        _service_models[service] = get_botocore_session().get_service_model(service)
    return _service_models[service]


@dataclass(frozen=True)
class Block:
    """One exposed AWS operation."""

    app: str
    service: str
    operation: str

    @property
    def block_id(self) -> str:
        """Snake case operation name, also the boto3 client method name."""
        return xform_name(self.operation)

    @property
    def key(self) -> str:
        return f'{self.app}/{self.block_id}'

    @property
    def operation_model(self) -> OperationModel:
        return get_service_model(self.service).operation_model(self.operation)

    @property
    def name(self) -> str:
        return display_name(self.operation)

    @property
    def description(self) -> str:
        return summarize_documentation(self.operation_model.documentation)

    @property
    def config_fields(self) -> Dict[str, Dict[str, Any]]:
        """
        Configuration fields in declaration order.

        Region and role ARN come first, followed by the operation's own
        input members.
        """
        fields = {
            'region': dict(REGION_FIELD),
            'assumeRoleArn': dict(ASSUME_ROLE_ARN_FIELD),
        }
        input_shape = self.operation_model.input_shape
        if input_shape is None:
            return fields

        required = set(input_shape.required_members)
        for member_name, member_shape in input_shape.members.items():
            fields[member_name] = {
                'name': display_name(member_name),
                'description': summarize_documentation(member_shape.documentation),
                'type': field_type(shape_to_schema(member_shape)),
                'required': member_name in required,
            }
        return fields

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema that block input configuration is validated against."""
        schema = shape_to_schema(self.operation_model.input_shape)
        properties = {
            'region': {'type': 'string', 'minLength': 1},
            'assumeRoleArn': {'type': 'string'},
        }
        properties.update(schema.get('properties', {}))
        return {
            'type': 'object',
            'properties': properties,
            'required': ['region'] + schema.get('required', []),
        }

    @property
    def output(self) -> Dict[str, Any]:
        return {
            'name': f'{self.name} Result',
            'description': f'Result from {self.operation} operation',
            'type': shape_to_schema(self.operation_model.output_shape),
        }

    def validate(self, input_config: Dict[str, Any]) -> None:
        """
        Validate input configuration against the block's input schema.

        Raises:
            ValidationError: For the first schema violation found, with the
                dotted path of the offending field
        """
        validator = Draft7Validator(self.input_schema)
        errors = sorted(
            validator.iter_errors(input_config),
            key=lambda e: [str(part) for part in e.path],
        )
        if not errors:
            return

        error = errors[0]
        field = '.'.join(str(part) for part in error.path) or None
        if error.validator == 'required':
            # Missing properties are reported on the parent object
            missing = error.message.split("'")[1]
            field = f'{field}.{missing}' if field else missing
        raise ValidationError(
            f'Invalid input for {self.key}: {error.message}',
            field=field,
            value=error.instance if error.validator != 'required' else None,
        )

    def describe(self) -> Dict[str, Any]:
        """Full block definition as handed to the workflow host."""
        return {
            'key': self.key,
            'app': self.app,
            'service': self.service,
            'operation': self.operation,
            'name': self.name,
            'description': self.description,
            'config': self.config_fields,
            'output': self.output,
        }


def list_blocks(app: Optional[str] = None) -> List[Block]:
    """
    List catalogue blocks in catalogue order.

    Args:
        app: Optional app name to restrict the listing to

    Raises:
        BlockNotFoundError: If app is given but not in the catalogue
    """
    if app is not None and app not in APPS:
        raise BlockNotFoundError(f'Unknown app: {app}', block_key=app)

    apps = [app] if app is not None else list(APPS)
    return [
        Block(app=name, service=APPS[name][0], operation=operation)
        for name in apps
        for operation in APPS[name][1]
    ]


def blocks_by_app() -> Dict[str, List[str]]:
    """Block ids grouped by app."""
    grouped = map_reduce(
        list_blocks(),
        keyfunc=lambda block: block.app,
        valuefunc=lambda block: block.block_id,
    )
    return dict(grouped)


def get_block(key: str) -> Block:
    """
    Look up a block by its "<app>/<block_id>" key.

    Raises:
        BlockNotFoundError: If the key is malformed or not in the catalogue
    """
    app, _, block_id = key.partition('/')
    if not block_id:
        raise BlockNotFoundError(
            f'Block key must look like "<app>/<block_id>", got: {key}',
            block_key=key,
        )

    if app in APPS:
        for block in list_blocks(app):
            if block.block_id == block_id:
                return block

    logger.warning(f'Block {key} not found in catalogue')
    raise BlockNotFoundError(f'Unknown block: {key}', block_key=key)
