"""User account service functions.

Registration, login and profile lookup against the credential store.
Passwords are hashed with bcrypt and never returned.
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from xferlogic.app.gateway.model.user import User
from xferlogic.app.gateway.schema.user import UserProfile
from xferlogic.common.exception import errors
from xferlogic.core.security.jwt import create_access_token, get_hash_password, password_verify

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(*, db_session: AsyncSession, email: str) -> User | None:
    result = await db_session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def register(*, db_session: AsyncSession, email: str, password: str) -> User:
    """Create a new account.

    Args:
        db_session: Database session
        email: Login email, normalised before lookup and insert
        password: Plain text password (hashed before storage)

    Returns:
        The newly created User

    Raises:
        EmailExistsError: If an account with this email already exists
    """
    email = normalize_email(email)

    if await get_user_by_email(db_session=db_session, email=email):
        logger.info(f"Registration rejected, email already exists: {email}")
        raise errors.EmailExistsError(email)

    # bcrypt is CPU bound, keep it off the event loop
    hashed = await asyncio.to_thread(get_hash_password, password)

    user = User(email=email, password=hashed)
    db_session.add(user)
    try:
        await db_session.flush()
    except IntegrityError:
        # Lost a race against a concurrent registration of the same email
        await db_session.rollback()
        logger.info(f"Registration rejected by unique constraint: {email}")
        raise errors.EmailExistsError(email)

    logger.info(f"Registered user {user.id}: {email}")
    return user


async def login(*, db_session: AsyncSession, email: str, password: str) -> str:
    """Check credentials and issue an access token.

    Unknown email and wrong password fail with the same error.

    Returns:
        Signed bearer token

    Raises:
        InvalidCredentialsError: If the email/password pair does not match
    """
    email = normalize_email(email)
    user = await get_user_by_email(db_session=db_session, email=email)

    if not user:
        logger.info("Login failed: unknown email")
        raise errors.InvalidCredentialsError()

    if not await asyncio.to_thread(password_verify, password, user.password):
        logger.info(f"Login failed: wrong password for user {user.id}")
        raise errors.InvalidCredentialsError()

    return create_access_token(user.id, user.email)


async def get_profile(*, db_session: AsyncSession, user_id: int) -> UserProfile:
    """Get a user's profile without the password hash.

    Raises:
        NotFoundError: If the user does not exist
    """
    user = await db_session.get(User, user_id)
    if not user:
        raise errors.NotFoundError(message="User not found", code="USER_NOT_FOUND")
    return UserProfile.model_validate(user)
