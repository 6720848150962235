"""
Resolution context.

Everything a resolution needs from its caller travels in a ResolutionContext
that is passed explicitly to each step, instead of being captured from the
surrounding request.

Lifecycle:
    1. Created by the API route or CLI command from the request input
    2. Passed to EnvironmentResolver.resolve()
    3. Threaded through every collaborator call unchanged
    4. Garbage collected after the response is returned
"""

from dataclasses import dataclass
from typing import Optional

from .exceptions import InvalidInputError


@dataclass(frozen=True)
class ResolutionContext:
    """
    Caller-supplied input and authorization for one resolution.

    Attributes:
        environment_ref: Entity reference of the environment to resolve
        identity: Calling user's entity reference; None when the caller is anonymous
        token: Catalog token, passed through to catalog calls
    """

    environment_ref: str
    identity: Optional[str] = None
    token: Optional[str] = None

    def __post_init__(self):
        if not self.environment_ref or not self.environment_ref.strip():
            raise InvalidInputError("environmentRef must be a non-empty string")

    @property
    def has_identity(self) -> bool:
        """Return True if the caller supplied a usable identity."""
        return bool(self.identity and self.identity.strip())
