"""HTTP primitives shared by the service handlers and the ASGI app."""
