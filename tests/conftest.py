"""
Global pytest configuration and fixtures.
"""

import pytest

from social_login.cli.utils import DEBUG_ENV_VAR
from social_login.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep the developer's own login configuration out of the tests.

    Tests that need one of these variables set it themselves.
    """
    for env_var in (CONFIG_ENV_VAR, DEBUG_ENV_VAR, "GITHUB_TOKEN"):
        monkeypatch.delenv(env_var, raising=False)
    yield
