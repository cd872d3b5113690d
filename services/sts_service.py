"""
STS service for resolving the credentials a block runs with.
"""
import time
import boto3
from dataclasses import dataclass
from typing import Any, Dict, Optional, TYPE_CHECKING
from botocore.exceptions import ClientError
from logger_config import get_logger

if TYPE_CHECKING:
    from mypy_boto3_sts import STSClient
else:
    STSClient = Any

logger = get_logger(__name__)

SESSION_NAME_PREFIX = 'flows-session'


@dataclass(frozen=True)
class Credentials:
    """AWS credentials held for the duration of one invocation."""

    access_key_id: str
    secret_access_key: str
    session_token: Optional[str] = None

    def as_client_kwargs(self) -> Dict[str, Optional[str]]:
        """Keyword arguments accepted by boto3.client()."""
        return {
            'aws_access_key_id': self.access_key_id,
            'aws_secret_access_key': self.secret_access_key,
            'aws_session_token': self.session_token,
        }


class StsService:
    """Service for STS AssumeRole credential exchange."""

    @staticmethod
    def generate_session_name() -> str:
        """
        Generate a role session name for an AssumeRole request.

        Returns:
            Session name suffixed with the current epoch time in milliseconds
        """
        return f'{SESSION_NAME_PREFIX}-{int(time.time() * 1000)}'

    def create_client(
        self,
        region: str,
        credentials: Credentials,
        endpoint: Optional[str] = None
    ) -> STSClient:
        """
        Create an STS client scoped to a region and optional custom endpoint.

        Args:
            region: AWS region name
            credentials: Credentials the client signs requests with
            endpoint: Optional endpoint URL override

        Returns:
            STS client
        """
        client_kwargs = credentials.as_client_kwargs()
        if endpoint:
            client_kwargs['endpoint_url'] = endpoint
        return boto3.client('sts', region_name=region, **client_kwargs)

    def assume_role(
        self,
        role_arn: str,
        region: str,
        credentials: Credentials,
        endpoint: Optional[str] = None
    ) -> Credentials:
        """
        Exchange base credentials for temporary role credentials.

        Args:
            role_arn: ARN of the IAM role to assume
            region: AWS region name for the STS client
            credentials: Base credentials used to call STS
            endpoint: Optional endpoint URL override

        Returns:
            Temporary credentials returned by STS

        Raises:
            ClientError: If the AssumeRole call fails
        """
        client = self.create_client(region, credentials, endpoint)
        session_name = self.generate_session_name()

        try:
            response = client.assume_role(
                RoleArn=role_arn,
                RoleSessionName=session_name
            )
        except ClientError as e:
            logger.error(f'STS assume_role failed for role {role_arn}: {str(e)}')
            raise

        temporary = response['Credentials']
        logger.info(f'Assumed role {role_arn} with session {session_name}')
        return Credentials(
            access_key_id=temporary['AccessKeyId'],
            secret_access_key=temporary['SecretAccessKey'],
            session_token=temporary['SessionToken'],
        )

    def resolve_credentials(
        self,
        base_credentials: Credentials,
        region: str,
        assume_role_arn: Optional[str] = None,
        endpoint: Optional[str] = None
    ) -> Credentials:
        """
        Produce the effective credentials for one invocation.

        Args:
            base_credentials: App-level credentials
            region: AWS region name
            assume_role_arn: Optional role ARN to assume first
            endpoint: Optional endpoint URL override

        Returns:
            base_credentials unchanged when no role is given, otherwise the
            temporary credentials of the assumed role
        """
        if not assume_role_arn:
            return base_credentials

        return self.assume_role(
            assume_role_arn, region, base_credentials, endpoint
        )
