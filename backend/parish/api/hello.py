# parish/api/hello.py
"""Unauthenticated liveness/greeting endpoints, served under /hello and /api/hello."""
from __future__ import annotations

from fastapi import APIRouter, Query

from parish.schemas.common import ApiResponse

WELCOME = "Hello, Most welcomed User of Parish Management System application !"


def _build(prefix: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=["Hello"])

    @router.get("", response_model=ApiResponse[str])
    def hello():
        return ApiResponse.ok(WELCOME)

    @router.get("/greet", response_model=ApiResponse[str])
    def greet(name: str = Query("Christ's Faithful")):
        return ApiResponse.ok(f"Greetings, {name}! Yezu Akuzwe iteka ryose.")

    return router


router = _build("/hello")
api_router = _build("/api/hello")
