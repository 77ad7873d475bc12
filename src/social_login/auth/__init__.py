"""Social login authentication - adapter contract and the GitHub adapter.

## Key Components

- `LoginAdapter`: Protocol the host aggregator calls (load/login/check_login/generate_user)
- `AdapterError`: The single error type raised by adapters
- `GitHubLoginAdapter`: GitHub implementation (direct-token and redirect OAuth modes)
- `GitHubLoginConfigModel`: Adapter configuration

## Redirect flow

```python
from social_login.auth import AuthorizationRedirect, GitHubLoginAdapter

adapter = GitHubLoginAdapter()
await adapter.load(
    {
        "app_id": "client-id",
        "redirect_uri": "https://app.example.com/login",
        "relay_base_url": "https://gatekeeper.example.com",
    }
)
result = await adapter.login()
if isinstance(result, AuthorizationRedirect):
    ...  # send the user to result.url

# After GitHub redirects back, on a fresh adapter:
token = await GitHubLoginAdapter().load(config, location=callback_url)
```
"""

from .contracts import AdapterError, AdapterErrorType, LoginAdapter
from .models import (
    AdapterMode,
    AuthorizationRedirect,
    CanonicalUser,
    GitHubLoginConfigModel,
    GitHubViewer,
    SessionState,
    TokenInfo,
    UserProfile,
    ViewerResponse,
)
from .providers import GitHubLoginAdapter

__all__ = [
    # Contracts
    "AdapterError",
    "AdapterErrorType",
    "LoginAdapter",
    # Models
    "AdapterMode",
    "AuthorizationRedirect",
    "CanonicalUser",
    "GitHubLoginConfigModel",
    "GitHubViewer",
    "SessionState",
    "TokenInfo",
    "UserProfile",
    "ViewerResponse",
    # Adapters
    "GitHubLoginAdapter",
]
