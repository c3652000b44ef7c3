"""HTTP routes."""

from fastapi import APIRouter

from gatehouse.api import admin, auth, health, pages

router = APIRouter()
router.include_router(pages.router, tags=["pages"])
router.include_router(auth.router, tags=["auth"])
router.include_router(admin.router, tags=["admin"])
router.include_router(health.router, tags=["health"])
