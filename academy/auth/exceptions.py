"""Authentication errors, all reported as 401 except duplicate registration."""

from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Authentication failed") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidCredentialsError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__(detail="Invalid email or password")


class MissingTokenError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__(detail="No token provided")


class InvalidTokenError(AuthenticationError):
    """Malformed token, bad signature, or a user that no longer exists."""

    def __init__(self) -> None:
        super().__init__(detail="Invalid token")


class TokenExpiredError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__(detail="Token has expired")


class RevokedTokenError(AuthenticationError):
    """Token issued before the user's last logout."""

    def __init__(self) -> None:
        super().__init__(detail="Token has been revoked")


class UserAlreadyExistsError(HTTPException):
    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail="A user with this email already exists")
