"""
Shared fixtures for the service tests.
"""
import logging
import os
import sys

import pytest

# Add parent directory to path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
import logger_config


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake credentials so no test can reach a real account."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')
    monkeypatch.delenv('AWS_PROFILE', raising=False)
    monkeypatch.delenv('AWS_ENDPOINT_URL', raising=False)


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset the cached config and the logging setup flag around each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    config._config = None
    logger_config._CONFIGURED = False
    yield
    config._config = None
    logger_config._CONFIGURED = False
    root.handlers = handlers
    root.setLevel(level)
