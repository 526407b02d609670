"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from freelance_hub.api.v1 import auth, clients, health, invoices, projects, users


def get_api_router(prefix: str = "/api/v1") -> APIRouter:
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(health.router)
    api_router.include_router(auth.router)
    api_router.include_router(users.router)
    api_router.include_router(clients.router)
    api_router.include_router(projects.router)
    api_router.include_router(invoices.router)
    return api_router
