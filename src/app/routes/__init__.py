"""
FastAPI Routes.

API 라우트 (REST)
"""

from . import snippets

__all__ = ["snippets"]
