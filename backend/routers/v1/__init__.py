"""API v1 Route modules."""

from backend.routers.v1 import checks, labor, payroll, punches, tips

__all__ = ["checks", "labor", "payroll", "punches", "tips"]
