"""
Tests for credential resolution.
"""
import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError
from moto import mock_aws

from services.sts_service import Credentials, StsService
from conftest import ROLE_ARN


@pytest.fixture
def base_credentials():
    return Credentials(
        access_key_id='AKIABASEKEY000000000',
        secret_access_key='base-secret',
        session_token='base-token',
    )


class TestCredentials:
    """Tests for Credentials."""

    def test_as_client_kwargs(self, base_credentials):
        assert base_credentials.as_client_kwargs() == {
            'aws_access_key_id': 'AKIABASEKEY000000000',
            'aws_secret_access_key': 'base-secret',
            'aws_session_token': 'base-token',
        }


class TestStsService:
    """Tests for StsService."""

    def test_generate_session_name(self):
        with patch('services.sts_service.time.time', return_value=1700000000.123):
            name = StsService.generate_session_name()
        assert name == 'flows-session-1700000000123'

    @pytest.mark.sts
    def test_no_role_returns_base_credentials(self, base_credentials):
        """Without a role ARN the base credentials are used as-is."""
        service = StsService()
        with patch('services.sts_service.boto3') as mock_boto3:
            resolved = service.resolve_credentials(base_credentials, 'us-east-1')

        assert resolved is base_credentials
        mock_boto3.client.assert_not_called()

    @pytest.mark.sts
    def test_empty_role_returns_base_credentials(self, base_credentials):
        service = StsService()
        with patch('services.sts_service.boto3') as mock_boto3:
            resolved = service.resolve_credentials(base_credentials, 'us-east-1', '')

        assert resolved is base_credentials
        mock_boto3.client.assert_not_called()

    @pytest.mark.sts
    @patch('services.sts_service.boto3')
    def test_assume_role_request(self, mock_boto3, base_credentials):
        """AssumeRole is called with the ARN and a generated session name."""
        mock_client = Mock()
        mock_client.assume_role.return_value = {
            'Credentials': {
                'AccessKeyId': 'ASIATEMP',
                'SecretAccessKey': 'temp-secret',
                'SessionToken': 'temp-token',
            }
        }
        mock_boto3.client.return_value = mock_client

        resolved = StsService().resolve_credentials(
            base_credentials, 'eu-west-1', ROLE_ARN, 'http://localhost:4566'
        )

        assert resolved == Credentials('ASIATEMP', 'temp-secret', 'temp-token')
        mock_boto3.client.assert_called_once_with(
            'sts',
            region_name='eu-west-1',
            aws_access_key_id='AKIABASEKEY000000000',
            aws_secret_access_key='base-secret',
            aws_session_token='base-token',
            endpoint_url='http://localhost:4566',
        )
        kwargs = mock_client.assume_role.call_args.kwargs
        assert kwargs['RoleArn'] == ROLE_ARN
        assert kwargs['RoleSessionName'].startswith('flows-session-')

    @pytest.mark.sts
    @patch('services.sts_service.boto3')
    def test_assume_role_error_propagates(self, mock_boto3, base_credentials):
        """STS errors reach the caller unmodified."""
        mock_client = Mock()
        error = ClientError(
            {'Error': {'Code': 'AccessDenied', 'Message': 'not authorized'}},
            'AssumeRole'
        )
        mock_client.assume_role.side_effect = error
        mock_boto3.client.return_value = mock_client

        with pytest.raises(ClientError) as exc_info:
            StsService().resolve_credentials(base_credentials, 'us-east-1', ROLE_ARN)

        assert exc_info.value is error

    @pytest.mark.sts
    @mock_aws()
    def test_assume_role_against_moto(self, base_credentials):
        """Temporary credentials replace the base credentials."""
        resolved = StsService().resolve_credentials(
            base_credentials, 'us-east-1', ROLE_ARN
        )

        assert resolved != base_credentials
        assert resolved.access_key_id != base_credentials.access_key_id
        assert resolved.session_token
