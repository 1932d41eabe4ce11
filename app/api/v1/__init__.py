"""API routes."""

from fastapi import APIRouter, Depends

from app.api.v1 import auth, groups, health, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/login", tags=["auth"])
router.include_router(
    users.router,
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(auth.protect_if_configured)],
)
router.include_router(
    groups.router,
    prefix="/groups",
    tags=["groups"],
    dependencies=[Depends(auth.protect_if_configured)],
)
