"""Test configuration and fixtures."""

import pytest
from pathlib import Path
import tempfile

from scriptstudio.auth.tokens import TokenSigner
from scriptstudio.config.loader import load_config_from_string
from scriptstudio.providers.mock_generator import create_mock_generator
from scriptstudio.runtime.accounts import AccountService
from scriptstudio.runtime.studio import ScriptStudio
from scriptstudio.storage.memory import InMemoryScriptStore, InMemoryUserStore


@pytest.fixture
def mock_generator():
    """Provide a mock generator for testing."""
    return create_mock_generator(default_count=3)


@pytest.fixture
def sample_config_yaml():
    """Provide a sample config YAML for testing."""
    return """
version: 1
generation:
  provider: mock
  model: mock-writer
segmentation:
  marker_label: Scene
limits:
  min_count: 1
  max_count: 200
  default_count: 4
  min_idea_length: 5
history:
  backend: memory
  limit: 50
auth:
  secret_env: SCRIPTSTUDIO_TEST_SECRET
  token_ttl_days: 7
  bcrypt_rounds: 4
"""


@pytest.fixture
def sample_config(sample_config_yaml):
    """Provide a loaded config object for testing."""
    return load_config_from_string(sample_config_yaml)


@pytest.fixture
def temp_config_file(sample_config_yaml):
    """Provide a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write(sample_config_yaml)
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


class SimpleTestLogger:
    """Simple logger for testing that captures messages."""

    def __init__(self):
        self.messages = []

    def info(self, msg: str, **kv):
        self.messages.append(('info', msg, kv))

    def warn(self, msg: str, **kv):
        self.messages.append(('warn', msg, kv))

    def error(self, msg: str, **kv):
        self.messages.append(('error', msg, kv))

    def names(self, level=None):
        """Message names, optionally filtered by level."""
        return [m for lvl, m, _ in self.messages if level is None or lvl == level]

    def clear(self):
        """Clear captured messages."""
        self.messages.clear()


class SimpleTestMeter:
    """Meter that records counters as (name, tags) tuples."""

    def __init__(self):
        self.counters = []
        self.observations = []

    def inc(self, name: str, amount: int = 1, **tags):
        self.counters.append((name, amount, tags))

    def observe(self, name: str, value: float, **tags):
        self.observations.append((name, value, tags))


@pytest.fixture
def test_logger():
    """Provide a test logger that captures messages."""
    return SimpleTestLogger()


@pytest.fixture
def test_meter():
    """Provide a test meter that captures counters."""
    return SimpleTestMeter()


@pytest.fixture
def script_store():
    return InMemoryScriptStore()


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def studio(sample_config, mock_generator, script_store, test_logger, test_meter):
    """Provide a studio wired to the mock generator and in-memory history."""
    return ScriptStudio(config=sample_config, generator=mock_generator, store=script_store,
                        logger=test_logger, meter=test_meter)


@pytest.fixture
def signer():
    return TokenSigner("test-secret-value", ttl_days=7)


@pytest.fixture
def accounts(sample_config, user_store, signer, test_logger):
    """Provide an account service over an in-memory user store."""
    return AccountService(users=user_store, signer=signer, config=sample_config, logger=test_logger)
