"""Authentication module exports."""

from academy.auth.context import AuthContext, CurrentAuth
from academy.auth.dependencies import CurrentUser, UserId


__all__ = [
    "AuthContext",
    "CurrentAuth",
    "CurrentUser",
    "UserId",
]
