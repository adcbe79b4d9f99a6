"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from household_cashflow.config import Settings, settings
from household_cashflow.infrastructure.singleflight import SingleFlight

# Shared across requests so concurrent income processing calls coalesce
_income_guard = SingleFlight()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide application settings"""
    return settings


def get_income_guard() -> SingleFlight:
    """Provide the single-flight guard for income processing"""
    return _income_guard
