from passlib.context import CryptContext
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Optional
from souq.core.config import settings
from souq.auth.firebase import verify_firebase_token
from fastapi import HTTPException, Depends, Request
from fastapi.security import OAuth2PasswordBearer

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def resolve_token(token: str) -> Optional[dict]:
    """Turn a bearer token (our JWT or a Firebase ID token) into the request user dict."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return verify_firebase_token(token)

    user_id = payload.get("sub")
    if user_id is None:
        return None
    return {
        "id": user_id,
        "email": payload.get("email"),
        "role": payload.get("role", "customer"),
        "provider": payload.get("provider", "local"),
    }


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/user/login", auto_error=False)


def get_current_user(request: Request, token: Optional[str] = Depends(oauth2_scheme)):
    user = getattr(request.state, "user", None)
    if user:
        return user
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = resolve_token(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user


def get_optional_user(request: Request) -> Optional[dict]:
    return getattr(request.state, "user", None)


def require_roles(*roles: str):
    def checker(user: dict = Depends(get_current_user)):
        if user.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user

    return checker


def ensure_store_access(user: dict, owner_id: str):
    """Admins manage every store; merchants only their own."""
    if user.get("role") == "admin":
        return
    if user.get("role") == "merchant" and user.get("id") == owner_id:
        return
    raise HTTPException(status_code=403, detail="You do not manage this store")
