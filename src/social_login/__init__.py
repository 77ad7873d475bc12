"""social_login - GitHub adapter for social login aggregators.

The package implements the provider side of a social login host's adapter
contract (``load``, ``login``, ``check_login``, ``generate_user``) for GitHub.

## Modules

### Authentication (`social_login.auth`)
Adapter contract, configuration models and the GitHub adapter.

### Configuration (`social_login.config`)
YAML configuration loading with ``${ENV_VAR}`` interpolation.

### CLI (`social_login.cli`)
``social-login-github`` command line entry point.

## Quick Start

```python
from social_login.auth import GitHubLoginAdapter

adapter = GitHubLoginAdapter()
await adapter.load({"app_id": "ghp_app_token"})
response = await adapter.check_login()
user = adapter.generate_user(response)
```
"""

__version__ = "0.1.0"
