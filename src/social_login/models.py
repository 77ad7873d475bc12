"""Base Pydantic model for social_login.

Every model in the package inherits from :class:`LoginBaseModel` so that
configuration and normalized provider data share the same behavior:

- Strict field validation (no extra fields allowed)
- Immutable instances

Example:
    >>> from social_login.models import LoginBaseModel
    >>>
    >>> class Viewer(LoginBaseModel):
    ...     id: str
    ...     name: str | None = None
    >>>
    >>> Viewer(id="1").model_dump()
    {'id': '1', 'name': None}
"""

from pydantic import BaseModel, ConfigDict


class LoginBaseModel(BaseModel):
    """Base model for all social_login Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable once built

    Models that must be mutated in place (the adapter's session state) override
    ``model_config`` instead of dropping the base class.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
