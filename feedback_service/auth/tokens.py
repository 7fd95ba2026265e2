"""
Bearer tokens for the feedback API.
What it provides:
- TokenIssuer: signs {exp, role} claims with HS256
- Authorizer: walks an Authorization header through header, format,
  signature, expiry and role checks

And, the main purpose:
Gate every protected route on a signed role + expiry credential.
"""


import time
from typing import Callable

import jwt

from feedback_service.core.errors import Forbidden, InvalidParameter, Unauthenticated


ALGORITHM = "HS256"
TOKEN_PREFIX = "Bearer"

READ_ONLY = "read-only"
WRITE_ONLY = "write-only"
UNRESTRICTED = "unrestricted"
ROLES = (READ_ONLY, WRITE_ONLY, UNRESTRICTED)

# role -> HTTP methods it may call; None means any
_ALLOWED_METHODS = {
    READ_ONLY: {"GET"},
    WRITE_ONLY: {"POST"},
    UNRESTRICTED: None,
}


class TokenIssuer:
    def __init__(
        self,
        secret: str,
        default_minutes: int = 10,
        max_minutes: int = 1440,
        clock: Callable[[], float] = time.time,
    ):
        self.secret = secret
        self.default_minutes = default_minutes
        self.max_minutes = max_minutes
        self.clock = clock

    def parse_minutes(self, raw: str | None) -> int:
        if raw is None or raw == "":
            return self.default_minutes
        try:
            minutes = int(raw)
        except ValueError:
            raise InvalidParameter(f"wrong minutes param '{raw}': invalid minutes parameter")
        if minutes <= 0 or minutes > self.max_minutes:
            raise InvalidParameter(
                f"wrong value for minutes param '{minutes}' (1..{self.max_minutes}): invalid minutes parameter"
            )
        return minutes

    @staticmethod
    def parse_role(raw: str | None) -> str:
        if raw is None or raw == "":
            return UNRESTRICTED
        if raw not in ROLES:
            raise InvalidParameter(f"wrong role '{raw}': invalid role parameter")
        return raw

    def issue(self, minutes: int | None = None, role: str = UNRESTRICTED) -> str:
        if minutes is None:
            minutes = self.default_minutes
        if minutes <= 0 or minutes > self.max_minutes:
            raise InvalidParameter(f"wrong value for minutes param '{minutes}': invalid minutes parameter")
        if role not in ROLES:
            raise InvalidParameter(f"wrong role '{role}': invalid role parameter")

        claims = {"exp": int(self.clock()) + minutes * 60, "role": role}
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)


class Authorizer:
    def __init__(self, secret: str, clock: Callable[[], float] = time.time):
        self.secret = secret
        self.clock = clock

    def authorize(self, header: str | None, method: str) -> dict:
        """
        Returns the token claims when `header` allows `method`.
        Raises Unauthenticated or Forbidden otherwise.
        """
        token = self._extract(header)
        claims = self._verify(token)
        self._check_expiry(claims)
        self._check_role(claims, method.upper())
        return claims

    @staticmethod
    def _extract(header: str | None) -> str:
        if not header:
            raise Unauthenticated(
                "wrong authorization header: missing authorization header", status_code=400
            )
        parts = header.split(" ")
        if len(parts) != 2 or parts[0] != TOKEN_PREFIX:
            raise Unauthenticated(
                "wrong authorization header: invalid authorization header, use 'Bearer <Token>'",
                status_code=400,
            )
        return parts[1]

    def _verify(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
        except jwt.InvalidAlgorithmError as e:
            raise Unauthenticated(f"wrong token authorization: unexpected signing method: {e}") from e
        except jwt.InvalidTokenError as e:
            raise Unauthenticated(f"wrong token authorization: {e}") from e

    def _check_expiry(self, claims: dict) -> None:
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise Unauthenticated("validating token error: token missing expired value")
        now = self.clock()
        if exp <= now:
            raise Unauthenticated(f"validating token error: expired ({int(now - exp)}s): token is expired")

    @staticmethod
    def _check_role(claims: dict, method: str) -> None:
        role = claims.get("role")
        if not isinstance(role, str):
            raise Unauthenticated("validating token error: token missing role value")
        if role not in _ALLOWED_METHODS:
            raise Forbidden(f"validating token error: not existing role '{role}': token has wrong role")
        allowed = _ALLOWED_METHODS[role]
        if allowed is not None and method not in allowed:
            raise Forbidden(f"validating token error: wrong role for '{method}': token has wrong role")
