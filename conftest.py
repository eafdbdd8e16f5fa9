import pytest

from config import reset_config


@pytest.fixture(autouse=True)
def fresh_config():
    # Every test starts from configuration rebuilt from the environment
    reset_config()
    yield
    reset_config()
