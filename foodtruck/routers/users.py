import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_users.authentication import JWTStrategy
from sqlalchemy import func, or_, select

from foodtruck.core.auth import UserManager, get_jwt_strategy, get_user_manager
from foodtruck.db.users import User
from foodtruck.schemas.users import LoginRequest, LoginResponse, UserRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    user_manager: UserManager = Depends(get_user_manager),
    strategy: JWTStrategy = Depends(get_jwt_strategy),
):
    """JSON login by username or email; returns a bearer token and the user."""
    identifier = payload.username.strip()
    session = user_manager.user_db.session
    res = await session.execute(
        select(User).where(
            or_(User.username == identifier, func.lower(User.email) == identifier.lower())
        )
    )
    user = res.scalars().first()

    if user is None or not user.is_active:
        user_manager.password_helper.hash(payload.password)
        logger.info("Failed login for %r", identifier)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    verified, updated_hash = user_manager.password_helper.verify_and_update(payload.password, user.hashed_password)
    if not verified:
        logger.info("Failed login for %r", identifier)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")
    if updated_hash is not None:
        await user_manager.user_db.update(user, {"hashed_password": updated_hash})

    token = await strategy.write_token(user)
    return LoginResponse(access_token=token, user=UserRead.model_validate(user, from_attributes=True))
