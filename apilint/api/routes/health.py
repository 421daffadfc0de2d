"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from apilint.api.dependencies import get_registry
from apilint.core.registry import RuleRegistry

router = APIRouter()


@router.get("/health")
async def health(registry: RuleRegistry = Depends(get_registry)):
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "1.0.0",
        "rules": len(registry),
    }
