"""
Top-level router.

Aggregates the domain routers.  The user routes are mounted under
``/users`` without a trailing slash: ``POST /users``, ``GET /users``,
``GET /users/{user_id}``, ``PUT /users/{user_id}`` and
``DELETE /users/{user_id}``.
"""

from fastapi import APIRouter

from .endpoints import users


router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
