"""
User endpoints.

Create, read, update, delete and list users.  Request bodies and the
path id are validated by FastAPI before these functions run (see
``api.errors`` for how failures become ``400`` responses).  Each
endpoint writes one log entry describing its outcome; storage details
go to the log only, never into the response body.

Reading a single user reports every failure as ``404``; update and
delete report every failure, a missing user included, as ``500``.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from user_api.app.api.deps import get_handler_logger, get_user_service
from user_api.app.core.exceptions import UserApiError
from user_api.app.schemas.user import UserCreate, UserRead, UserUpdate, UserWithAge
from user_api.app.services.user_service import UserService


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    service: UserService = Depends(get_user_service),
    logger: logging.Logger = Depends(get_handler_logger),
) -> UserRead:
    """Create a user and return the stored record."""
    try:
        user = await service.create_user(user_in.name, user_in.dob)
    except UserApiError as exc:
        logger.error("Failed to create user", extra={"error": str(exc)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create user")
    logger.info("User created successfully", extra={"user_id": user.id})
    return user


@router.get("/{user_id}", response_model=UserWithAge)
async def get_user(
    user_id: int = Path(..., ge=INT32_MIN, le=INT32_MAX),
    service: UserService = Depends(get_user_service),
    logger: logging.Logger = Depends(get_handler_logger),
) -> UserWithAge:
    """Return a user together with their current age."""
    try:
        user = await service.get_user_by_id(user_id)
    except UserApiError as exc:
        logger.error("Failed to get user by ID", extra={"user_id": user_id, "error": str(exc)})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    logger.info("User retrieved successfully", extra={"user_id": user.id})
    return user


@router.get("", response_model=List[UserWithAge])
async def list_users(
    service: UserService = Depends(get_user_service),
    logger: logging.Logger = Depends(get_handler_logger),
) -> List[UserWithAge]:
    """List every user with their current age; ``[]`` when there are none."""
    try:
        users = await service.list_users()
    except UserApiError as exc:
        logger.error("Failed to list users", extra={"error": str(exc)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to retrieve users")
    logger.info("Listed all users successfully", extra={"count": len(users)})
    return users


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_in: UserUpdate,
    user_id: int = Path(..., ge=INT32_MIN, le=INT32_MAX),
    service: UserService = Depends(get_user_service),
    logger: logging.Logger = Depends(get_handler_logger),
) -> UserRead:
    """Replace a user's name and date of birth."""
    try:
        user = await service.update_user(user_id, user_in.name, user_in.dob)
    except UserApiError as exc:
        logger.error("Failed to update user", extra={"user_id": user_id, "error": str(exc)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update user")
    logger.info("User updated successfully", extra={"user_id": user.id})
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(
    user_id: int = Path(..., ge=INT32_MIN, le=INT32_MAX),
    service: UserService = Depends(get_user_service),
    logger: logging.Logger = Depends(get_handler_logger),
) -> Response:
    """Delete a user; a second delete of the same id fails."""
    try:
        await service.delete_user(user_id)
    except UserApiError as exc:
        logger.error("Failed to delete user", extra={"user_id": user_id, "error": str(exc)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete user")
    logger.info("User deleted successfully", extra={"user_id": user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
