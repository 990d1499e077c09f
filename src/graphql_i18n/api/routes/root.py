from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint."""
    return {
        "meta": {
            "title": "GraphQL i18n API",
            "description": "Manage translation records overlaid onto GraphQL results.",
            "version": "0.1.0",
        },
        "links": {
            "self": "/",
            "translations": "/translations/{type}",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
