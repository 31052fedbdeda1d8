"""REST API presentation layer for the user directory.

Structure:
    api/
    ├── app.py                 # FastAPI application factory
    ├── dependencies.py        # Dependency injection
    ├── exception_handlers.py  # Uniform error responses
    ├── middleware.py          # Request logging
    ├── routers/               # API route handlers
    └── schemas/               # Pydantic request/response schemas
"""
