from collections import namedtuple
from typing import Optional

import jwt

from .config import JWT_SECRET
from .errors import AuthError, ServiceError
from .logs import ErrorLogger

VerifiedTokenData = namedtuple(
    "VerifiedTokenData",
    [
        "user_id", "exp", "iat"
    ]
)


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise AuthError("Authorization header missing")
    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise AuthError("Malformed Authorization header. Expected 'Bearer <token>'")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("Invalid authentication scheme. Expected 'Bearer'")
    return token.strip()


class VerifyToken:
    """Verifies an HS256 token issued by the upstream identity provider."""

    def __init__(self, logger: ErrorLogger, secret_key: str = JWT_SECRET):
        self.logger = logger
        self.secret_key = secret_key

    def __call__(self, token: str) -> VerifiedTokenData:
        if not self.secret_key:
            self.logger.error("JWT identity mode enabled without JWT_SECRET")
            raise ServiceError("Server configuration error")
        try:
            payload = jwt.decode(
                jwt=token,
                key=self.secret_key,
                algorithms=["HS256"],
                options={"verify_exp": True}
            )
        except jwt.ExpiredSignatureError:
            self.logger.warning(f"Expired token: {token[:10]}...")
            raise AuthError("Token has expired")
        except jwt.InvalidSignatureError:
            self.logger.warning(f"Invalid signature: {token[:10]}...")
            raise AuthError("Invalid token signature")
        except jwt.DecodeError:
            self.logger.warning(f"Decode error: {token[:10]}...")
            raise AuthError("Invalid token format")
        except jwt.InvalidTokenError:
            self.logger.warning(f"Invalid token: {token[:10]}...")
            raise AuthError("Invalid token")

        user_id = payload.get("sub")
        if not user_id:
            self.logger.warning(f"Token missing 'sub' for token: {token[:10]}...")
            raise AuthError("Token missing required 'sub' field")

        return VerifiedTokenData(
            user_id=str(user_id),
            exp=payload.get("exp"),
            iat=payload.get("iat")
        )
