# app/machines/__init__.py
from .routes import machines_api_bp

__all__ = ["machines_api_bp"]
