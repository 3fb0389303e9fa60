"""Pydantic models for API request/response.

Class names become schema names in the exported OpenAPI contract, which the
dashboard's generated types reference directly (e.g. components["schemas"]["User"]).
"""

from typing import Optional
from pydantic import BaseModel, Field


class User(BaseModel):
    """A user record as returned by the API."""
    id: str = Field(..., description="User ID")
    name: str = Field(..., description="User's name")
    email: str = Field(..., description="User's email")
    status: Optional[int] = Field(None, description="HTTP status code of the response carrying this record")


class CreateUserRequest(BaseModel):
    """Request model for creating a user."""
    name: str = Field(..., description="User's name")
    email: str = Field(..., description="User's email")


class UpdateUserRequest(BaseModel):
    """Request model for a partial user update. Omitted fields are left unchanged."""
    name: Optional[str] = Field(None, description="User's name")
    email: Optional[str] = Field(None, description="User's email")


class UsersListResponse(BaseModel):
    """Response model for the user list."""
    users: list[User]
    status: int


class DeleteUserResponse(BaseModel):
    """Response model for user deletion."""
    deleted: bool


class ErrorResponse(BaseModel):
    """Error body for failed requests."""
    error: str


class HelloResponse(BaseModel):
    """Response model for the greeting endpoint."""
    message: str = Field(..., description="A welcome message from the API")


class HealthResponse(BaseModel):
    """Response model for the liveness probe."""
    status: int
