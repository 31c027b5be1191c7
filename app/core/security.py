import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from app.core.config import settings
from app.schemas.user import TokenPayload

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """bcrypt 비밀번호 해시"""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # 손상된 해시 문자열
        logger.warning("비밀번호 해시 형식 오류")
        return False


def create_access_token(payload: TokenPayload, expires_delta: timedelta | None = None) -> str:
    """JWT 액세스 토큰 발급"""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = payload.model_dump(by_alias=True)
    claims["exp"] = expire
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenPayload | None:
    """JWT 검증 및 해석 (실패 시 None)"""
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.PyJWTError as e:
        logger.debug(f"토큰 검증 실패: {e.__class__.__name__}")
        return None
    try:
        return TokenPayload.model_validate(claims)
    except ValueError:
        logger.debug("토큰 본문 형식 오류")
        return None
