"""
Shared fixtures for block tests.
"""
import os
import sys

import pytest

# Add parent directory to path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import Config  # noqa: E402

ROLE_ARN = 'arn:aws:iam::123456789012:role/flows-test-role'


@pytest.fixture
def app_config():
    """Static base credentials."""
    return Config(
        access_key_id='AKIABASEKEY000000000',
        secret_access_key='base-secret',
        session_token=None,
    )


@pytest.fixture
def mock_context():
    """Mock Lambda context."""
    class MockContext:
        def __init__(self):
            self.function_name = 'test-function'
            self.memory_limit_in_mb = 512
            self.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:test'
            self.aws_request_id = 'test-request-id'

    return MockContext()
