"""
Supamock Auth - Schemas.

Mutable auth state shared by one emulator instance.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from supamock.schemas import AuthStateChange


class AuthState(BaseModel):
    """Current principal, session, standing error and scripted events."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: Any = None
    session: Any = None
    error: Any = None
    state_changes: list[AuthStateChange] = Field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        """Check if a session is present."""
        return self.session is not None
