from fastapi import APIRouter

from signature_studio.interfaces.http.routers import activity, assets, assignments, auth, misc, templates, users


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    router.include_router(templates.router, prefix="/templates", tags=["templates"])
    router.include_router(assignments.router, prefix="/assignments", tags=["assignments"])
    router.include_router(assets.router, prefix="/upload", tags=["assets"])
    router.include_router(activity.router, prefix="/activity", tags=["activity"])
    router.include_router(misc.router, tags=["misc"])
    return router


__all__ = [
    "create_api_router",
]
