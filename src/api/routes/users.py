"""User CRUD routes."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_user_repo
from api.models import (
    CreateUserRequest,
    DeleteUserResponse,
    ErrorResponse,
    UpdateUserRequest,
    User,
    UsersListResponse,
)
from domain.model.errors import NotFoundError
from port.user_repository import UserRepository
from services.user_service import create_user, delete_user, update_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/users", tags=["users"])

USER_NOT_FOUND = "User not found"

_INVALID_REQUEST = {"model": ErrorResponse, "description": "Invalid request"}
_NOT_FOUND = {"model": ErrorResponse, "description": USER_NOT_FOUND}


def _not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(error=USER_NOT_FOUND).model_dump(),
    )


@router.get(
    "",
    response_model=UsersListResponse,
    response_model_exclude_none=True,
    summary="List all users",
)
async def list_users(repo: UserRepository = Depends(get_user_repo)):
    """Get a list of all users."""
    users = [User(**asdict(u)) for u in repo.list()]
    logger.info("Listed users", extra={"count": len(users)})
    return UsersListResponse(users=users, status=status.HTTP_200_OK)


@router.post(
    "",
    response_model=User,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
    responses={400: _INVALID_REQUEST},
)
async def create(request: CreateUserRequest, repo: UserRepository = Depends(get_user_repo)):
    """Create a new user with name and email."""
    user = create_user(repo, name=request.name, email=request.email)
    return User(**asdict(user), status=status.HTTP_201_CREATED)


@router.get(
    "/{id}",
    response_model=User,
    response_model_exclude_none=True,
    summary="Get user by ID",
    responses={404: _NOT_FOUND},
)
async def get_user(id: str, repo: UserRepository = Depends(get_user_repo)):
    """Get a user by their ID."""
    user = repo.get(id)
    if user is None:
        return _not_found()
    return User(**asdict(user), status=status.HTTP_200_OK)


@router.put(
    "/{id}",
    response_model=User,
    response_model_exclude_none=True,
    summary="Update user by ID",
    responses={400: _INVALID_REQUEST, 404: _NOT_FOUND},
)
async def update(id: str, request: UpdateUserRequest, repo: UserRepository = Depends(get_user_repo)):
    """Update a user's name and/or email by their ID."""
    try:
        user = update_user(repo, id, name=request.name, email=request.email)
    except NotFoundError:
        return _not_found()
    return User(**asdict(user), status=status.HTTP_200_OK)


@router.delete(
    "/{id}",
    response_model=DeleteUserResponse,
    summary="Delete user by ID",
    responses={404: {"model": DeleteUserResponse, "description": USER_NOT_FOUND}},
)
async def delete(id: str, repo: UserRepository = Depends(get_user_repo)):
    """Delete a user by their ID."""
    try:
        delete_user(repo, id)
    except NotFoundError:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=DeleteUserResponse(deleted=False).model_dump(),
        )
    return DeleteUserResponse(deleted=True)
