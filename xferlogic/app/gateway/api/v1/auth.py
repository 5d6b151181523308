"""Account API endpoints: registration, login and profile."""

from typing import Any

from fastapi import APIRouter

from xferlogic.app.gateway.schema.user import LoginParam, LoginResult, RegisterParam, RegisterResult, UserProfile
from xferlogic.app.gateway.service import user_service
from xferlogic.core.security.jwt import CurrentIdentity
from xferlogic.database.db import CurrentSession

router = APIRouter(tags=['Auth'])


@router.post('/register', response_model=RegisterResult)
async def register(obj: RegisterParam, db: CurrentSession) -> Any:
    """Create an account. Fails with 400 if the email is already registered."""
    await user_service.register(db_session=db, email=obj.email, password=obj.password)
    return RegisterResult(success=True)


@router.post('/login', response_model=LoginResult)
async def login(obj: LoginParam, db: CurrentSession) -> Any:
    """Exchange email and password for a bearer token valid for 7 days."""
    token = await user_service.login(db_session=db, email=obj.email, password=obj.password)
    return LoginResult(token=token)


@router.get('/me', response_model=UserProfile)
async def get_current_user_profile(identity: CurrentIdentity, db: CurrentSession) -> Any:
    """Get the caller's profile (password excluded)."""
    return await user_service.get_profile(db_session=db, user_id=identity.user_id)
