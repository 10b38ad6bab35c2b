"""Dependency providers for the web API."""

from __future__ import annotations

from fastapi import Request

from ..config import AppConfig
from ..service import ResumeChecker


def get_checker(request: Request) -> ResumeChecker:
    """Access the shared resume checker from app state."""
    return request.app.state.checker


def get_config(request: Request) -> AppConfig:
    return request.app.state.config
