"""
Shared fixtures for faucet tests.
"""
import os
import pytest


@pytest.fixture
def mock_context():
    """Mock Lambda context."""
    class MockContext:
        def __init__(self):
            self.function_name = 'near-faucet'
            self.memory_limit_in_mb = 256
            self.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:near-faucet'
            self.aws_request_id = 'test-request-id'

    return MockContext()


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake AWS credentials so moto never reaches a real account."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')


@pytest.fixture(autouse=True)
def reset_config():
    """Rebuild the config singleton for every test."""
    import config
    config._config = None
    yield
    config._config = None
