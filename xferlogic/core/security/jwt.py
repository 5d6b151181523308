import logging

from datetime import timedelta
from typing import Annotated

import jwt

from fastapi import Depends, Request
from pwdlib import PasswordHash
from pwdlib.hashers.bcrypt import BcryptHasher
from pydantic import BaseModel

from xferlogic.common.exception import errors
from xferlogic.core.conf import settings
from xferlogic.utils.timezone import timezone

logger = logging.getLogger(__name__)

# bcrypt embeds the salt in the hash, nothing to store separately
password_hash = PasswordHash((BcryptHasher(rounds=settings.USER_PASSWORD_BCRYPT_ROUNDS),))


class TokenPayload(BaseModel):
    """Identity carried by a verified access token."""

    user_id: int
    email: str


def get_hash_password(password: str) -> str:
    """
    使用 bcrypt 哈希密码

    :param password: 明文密码
    :return:
    """
    return password_hash.hash(password)


def password_verify(plain_password: str, hashed_password: str) -> bool:
    """
    密码验证

    :param plain_password: 要验证的密码
    :param hashed_password: 要比较的哈希密码
    :return:
    """
    return password_hash.verify(plain_password, hashed_password)


def create_access_token(user_id: int, email: str) -> str:
    """
    生成访问令牌

    :param user_id: 用户 ID
    :param email: 用户邮箱
    :return:
    """
    now = timezone.now()
    expire = now + timedelta(seconds=settings.TOKEN_EXPIRE_SECONDS)
    payload = {
        'sub': str(user_id),
        'email': email,
        'iat': int(now.timestamp()),
        'exp': int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.TOKEN_SECRET_KEY, algorithm=settings.TOKEN_ALGORITHM)


def decode_token(token: str) -> TokenPayload:
    """
    解析并校验令牌

    :param token: 访问令牌
    :return:
    """
    try:
        payload = jwt.decode(
            token,
            settings.TOKEN_SECRET_KEY,
            algorithms=[settings.TOKEN_ALGORITHM],
            options={'require': ['sub', 'exp']},
        )
        user_id = int(payload['sub'])
        email = payload['email']
    except jwt.ExpiredSignatureError:
        raise errors.InvalidTokenError(reason='expired')
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
        raise errors.InvalidTokenError(reason='malformed')
    if not isinstance(email, str):
        raise errors.InvalidTokenError(reason='malformed')
    return TokenPayload(user_id=user_id, email=email)


def get_token(request: Request) -> str:
    """
    从请求头中获取 Bearer token

    :param request: FastAPI 请求对象
    :return:
    """
    authorization = request.headers.get('Authorization')
    if not authorization:
        raise errors.MissingTokenError()
    scheme, _, token = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        raise errors.InvalidTokenError(reason='scheme')
    return token.strip()


async def jwt_authentication(request: Request) -> TokenPayload:
    """
    JWT 认证依赖

    Verifies the bearer token and stores the identity on ``request.state``.

    :param request: FastAPI 请求对象
    :return:
    """
    token = get_token(request)
    try:
        identity = decode_token(token)
    except errors.InvalidTokenError as e:
        logger.info(f"Rejected token on {request.url.path}: {e.reason}")
        raise
    request.state.identity = identity
    return identity


# JWT authorizes dependency injection
DependsJwtAuth = Depends(jwt_authentication)

# Verified identity of the caller
CurrentIdentity = Annotated[TokenPayload, DependsJwtAuth]
