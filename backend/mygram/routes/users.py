"""
MyGram Backend - User Route Handlers
=====================================

What:  Registration, login and the logged in user's own account.

    POST   /users/register  → 201 profile | 209 already registered
    POST   /users/login     → 200 {token} | 400 invalid credentials
    PUT    /users           → 200 profile | 200 {message} on duplicate
    DELETE /users           → 200 {message}

Status quirks:
    A duplicate username/email answers 209 on register (a non-standard
    "already exists, log in instead") and 200 with a message on profile
    update. Existing clients depend on both codes, so these handlers catch
    DuplicateIdentityError themselves instead of letting the global 409
    mapping apply.
"""

import logging
from typing import Union

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from mygram.database import get_db_session
from mygram.dependencies import get_current_user_id, get_user_service
from mygram.exceptions import DuplicateIdentityError
from mygram.schemas.common import ErrorResponse, MessageResponse
from mygram.schemas.user import (
    LoginResponse,
    UserLogin,
    UserRegister,
    UserRegisterResponse,
    UserUpdate,
    UserUpdateResponse,
)
from mygram.services.user_service import UserService

logger = logging.getLogger(__name__)

HTTP_209_ALREADY_REGISTERED = 209

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/register",
    response_model=UserRegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        HTTP_209_ALREADY_REGISTERED: {
            "description": "Email or username already registered",
            "model": MessageResponse,
        },
        400: {"description": "Invalid input", "model": ErrorResponse},
    },
    summary="Register a new user",
    description="Minimum age is 9. Minimum password length is 6.",
)
async def register_user(
    payload: UserRegister,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> Union[UserRegisterResponse, JSONResponse]:
    try:
        user = await users.register(db, payload)
    except DuplicateIdentityError:
        logger.info("Registration rejected: duplicate username or email")
        return JSONResponse(
            status_code=HTTP_209_ALREADY_REGISTERED,
            content={
                "message": (
                    "The email or username is already registered. "
                    "If it is yours, do login instead."
                ),
            },
        )
    return UserRegisterResponse.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"description": "Email or password is incorrect", "model": ErrorResponse}},
    summary="Log in and receive a bearer token",
)
async def login_user(
    payload: UserLogin,
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> LoginResponse:
    token = await users.authenticate(db, payload.email, payload.password)
    return LoginResponse(token=token)


@router.put(
    "",
    response_model=UserUpdateResponse,
    responses={
        200: {"description": "Updated profile, or a message if the new values are taken"},
        400: {"description": "Invalid input or missing token", "model": ErrorResponse},
        401: {"description": "Invalid or expired token", "model": ErrorResponse},
        404: {"description": "Account no longer exists", "model": ErrorResponse},
    },
    summary="Update the logged in user",
    description="Leave username or email empty to keep the current value.",
)
async def update_user(
    payload: UserUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> Union[UserUpdateResponse, JSONResponse]:
    try:
        user = await users.update_profile(db, user_id, payload)
    except DuplicateIdentityError:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"message": "The email or username is already registered."},
        )
    return UserUpdateResponse.model_validate(user)


@router.delete(
    "",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing token", "model": ErrorResponse},
        401: {"description": "Invalid or expired token", "model": ErrorResponse},
        404: {"description": "Account no longer exists", "model": ErrorResponse},
    },
    summary="Delete the logged in user",
)
async def delete_user(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
) -> MessageResponse:
    await users.delete_self(db, user_id)
    return MessageResponse(message="Your account has been successfully deleted")
