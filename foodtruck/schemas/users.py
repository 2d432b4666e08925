# Pydantic schemas for user-related requests/responses
# fastapi-users provides the base schemas; these add the username/role columns

import uuid
from typing import Optional

from fastapi_users import schemas
from pydantic import BaseModel


class UserRead(schemas.BaseUser[uuid.UUID]):
    username: Optional[str] = None
    role: str = "staff"


class UserCreate(schemas.BaseUserCreate):
    username: Optional[str] = None
    role: str = "staff"


class UserUpdate(schemas.BaseUserUpdate):
    username: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    # username or email
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
