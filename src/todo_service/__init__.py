"""
Todo Service package.

A FastAPI application serving CRUD endpoints for todo items stored in
MongoDB. Build the app with :func:`todo_service.main.create_app` or serve
``todo_service.main:app`` with uvicorn.
"""

__version__ = "0.1.0"
