"""Liveness probe."""

from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from forum.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


def _package_version() -> str:
    try:
        return version("forum-api")
    except PackageNotFoundError:
        return "unknown"


class HealthResponse(BaseModel):
    status: str
    environment: str
    version: str
    checked_at: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        environment=settings.environment,
        version=_package_version(),
        checked_at=datetime.now(timezone.utc),
    )
