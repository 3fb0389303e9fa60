"""Liveness probe and greeting endpoints."""

from fastapi import APIRouter, status

from api.models import HealthResponse, HelloResponse

router = APIRouter(tags=["health"])


@router.get("/hello", response_model=HelloResponse)
async def hello():
    return HelloResponse(message="Hello, world!")


@router.get("/health", response_model=HealthResponse)
async def health():
    """Liveness probe. Always healthy while the process serves requests."""
    return HealthResponse(status=status.HTTP_200_OK)
