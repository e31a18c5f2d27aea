"""Serve a dispatch table over ASGI."""

from routebook.server.app import ASGIApp

__all__ = ["ASGIApp"]
