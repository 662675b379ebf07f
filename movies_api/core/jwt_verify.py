from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from jose.exceptions import ExpiredSignatureError
from movies_api.core.config import settings

# без токена запрос пропускаем, но пользователя не знаем
bearer = HTTPBearer(auto_error=False)


def decode_access(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.jwt.secret,
            algorithms=[settings.jwt.algorithm],
            audience=settings.jwt.audience,
            issuer=settings.jwt.issuer,
        )
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "token_expired", "message": "Access token expired"},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "token_invalid", "message": "Invalid token"},
        )


def user_id_from_claims(claims: dict) -> UUID:
    try:
        return UUID(str(claims.get("sub")))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "token_invalid", "message": "Token subject is not a user id"},
        )


async def optional_user_id(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> UUID | None:
    if cred is None:
        return None
    return user_id_from_claims(decode_access(cred.credentials))


async def current_user_id(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> UUID:
    if cred is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "not_authenticated", "message": "Missing Authorization header"},
        )
    return user_id_from_claims(decode_access(cred.credentials))
