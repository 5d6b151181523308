"""
Gateway API Router - v1.

Endpoints include:
- /register, /login, /me - Accounts and bearer tokens
- /text, /image - Text and image generation
- /pdf, /docx, /excel, /svg - Document conversion
"""

from fastapi import APIRouter

from xferlogic.app.gateway.api.v1.auth import router as auth_router
from xferlogic.app.gateway.api.v1.documents import router as documents_router
from xferlogic.app.gateway.api.v1.generation import router as generation_router

v1 = APIRouter()

v1.include_router(auth_router)
v1.include_router(generation_router)
v1.include_router(documents_router)

__all__ = ['v1']
