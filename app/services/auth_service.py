from typing import Optional
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from loguru import logger
from passlib.context import CryptContext
from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session, select
from app.core.config import settings
from app.core.errors import ConflictError, UnauthorizedError
from app.db.session import get_session
from app.models.user import User
from app.schemas.auth import RegisterRequest

pwd_context = CryptContext(schemes=['bcrypt'], deprecated='auto')
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


def create_access_token(user_id: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        'sub': user_id,
        'type': 'access',
        'iat': now,
        'exp': now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the user id carried by a valid access token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        raise UnauthorizedError('Invalid token') from exc

    if payload.get('type') != 'access':
        raise UnauthorizedError('Invalid token type')
    user_id = payload.get('sub')
    if not user_id:
        raise UnauthorizedError('Invalid token')
    return user_id


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email)).first()


def create_user(session: Session, payload: RegisterRequest) -> User:
    if get_user_by_email(session, payload.email):
        raise ConflictError('Email already registered')
    user = User(
        name=payload.name,
        email=payload.email,
        hashed_password=hash_password(payload.password),
        mobile=payload.mobile,
        age=payload.age,
        profession=payload.profession,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info('auth.registered', user_id=user.id)
    return user


def authenticate_user(session: Session, email: str, password: str) -> User:
    user = get_user_by_email(session, email)
    if not user or not verify_password(password, user.hashed_password):
        raise UnauthorizedError('Invalid credentials')
    return user


def _user_from_token(session: Session, token: Optional[str]) -> User:
    if not token:
        raise UnauthorizedError()
    user_id = decode_access_token(token)
    user = session.exec(select(User).where(User.id == user_id)).first()
    if not user:
        raise UnauthorizedError('User not found')
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: Session = Depends(get_session),
) -> User:
    return _user_from_token(session, credentials.credentials if credentials else None)


def get_stream_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token: Optional[str] = Query(default=None),
    session: Session = Depends(get_session),
) -> User:
    # Media players cannot set headers, so the token may also arrive as ?token=.
    raw = credentials.credentials if credentials else token
    return _user_from_token(session, raw)
