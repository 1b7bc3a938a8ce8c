"""
App assembly entry point.

Re-exports the FastAPI `app` from `storefront.api.main` so servers can run
``uvicorn app:app``.
"""

from storefront.api.main import app  # noqa: F401
