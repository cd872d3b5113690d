"""
Operation invoker shared by every block.
"""
import boto3
from typing import Any, Callable, Dict, Optional
from botocore.exceptions import BotoCoreError, ClientError

from blocks.registry import Block
from blocks.schema import coerce_params
from config import Config
from logger_config import get_logger
from services.sts_service import Credentials, StsService
from utils.serialization import serialize_response

logger = get_logger(__name__)

Emitter = Callable[[Dict[str, Any]], None]


class OperationInvoker:
    """Runs one block invocation: credentials, client, call, emit."""

    def __init__(
        self,
        app_config: Config,
        sts_service: Optional[StsService] = None
    ) -> None:
        """
        Initialize operation invoker.

        Args:
            app_config: App-level base credentials and optional endpoint
            sts_service: STS service used for role assumption
        """
        self.app_config = app_config
        self.sts_service = sts_service or StsService()

    def create_client(
        self,
        service: str,
        region: str,
        credentials: Credentials
    ) -> Any:
        """Create a boto3 client for the block's service."""
        client_kwargs = credentials.as_client_kwargs()
        if self.app_config.endpoint:
            client_kwargs['endpoint_url'] = self.app_config.endpoint
        return boto3.client(service, region_name=region, **client_kwargs)

    def invoke(
        self,
        block: Block,
        input_config: Dict[str, Any],
        emit: Optional[Emitter] = None
    ) -> Dict[str, Any]:
        """
        Invoke a block's AWS operation and emit its result.

        Args:
            block: Catalogue block to run
            input_config: Region, optional assumeRoleArn and operation parameters
            emit: Optional callback receiving the result exactly once

        Returns:
            Serialized response, {} when the operation returned no body

        Raises:
            ValidationError: If input_config fails the block's input schema or
                carries an unparseable timestamp or base64 value
            ClientError: If STS or the target service rejects the call
        """
        params = {
            key: value for key, value in input_config.items()
            if value is not None
        }
        block.validate(params)

        region = params.pop('region')
        assume_role_arn = params.pop('assumeRoleArn', None)
        operation_params = coerce_params(block.operation_model.input_shape, params)

        credentials = self.sts_service.resolve_credentials(
            self.app_config.credentials,
            region,
            assume_role_arn,
            self.app_config.endpoint,
        )

        client = self.create_client(block.service, region, credentials)

        logger.info(f'Calling {block.service}.{block.block_id} in {region}')
        try:
            response = getattr(client, block.block_id)(**operation_params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f'{block.service}.{block.block_id} failed: {str(e)}')
            raise

        result = serialize_response(response) or {}
        if emit is not None:
            emit(result)
        return result
