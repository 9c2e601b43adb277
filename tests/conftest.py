"""Shared pytest fixtures for all tests."""

import pytest

from documents.config import Config
from documents.schemas import DocumentUpload
from documents.session import create_session
from tests.fake_pod import ALICE_ROOT, ALICE_WEBID, BOB_ROOT, BOB_WEBID, FakePod


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .podocs directory
    """
    config_dir = tmp_path / '.podocs'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def config():
    """In-memory config pointing at the default identity provider."""
    return Config(identity_provider='https://opencommons.net', pod_scheme='https')


@pytest.fixture
def fake_pod():
    """
    In-memory pods for alice and bob.

    Returns:
        FakePod serving both pod roots
    """
    pod = FakePod()
    pod.add_pod(ALICE_ROOT, ALICE_WEBID, 'alice-token')
    pod.add_pod(BOB_ROOT, BOB_WEBID, 'bob-token')
    return pod


@pytest.fixture
def alice(fake_pod, config):
    """Session of the pod owner alice."""
    return create_session(ALICE_WEBID, access_token='alice-token', config=config, transport=fake_pod.transport)


@pytest.fixture
def bob(fake_pod, config):
    """Session of bob, who owns a different pod."""
    return create_session(BOB_WEBID, access_token='bob-token', config=config, transport=fake_pod.transport)


@pytest.fixture
def passport_upload():
    """
    Sample passport upload form payload.

    Returns:
        DocumentUpload for a small PDF
    """
    return DocumentUpload(
        type='Passport',
        date='2024-01-01',
        description='Scanned passport',
        file_name='passport.pdf',
        content=b'%PDF-1.4 sample passport',
    )

