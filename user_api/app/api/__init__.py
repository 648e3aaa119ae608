"""
API package containing the HTTP routes.

``router`` aggregates the endpoint routers, ``errors`` holds the
exception handlers and ``deps`` resolves the components wired up by
the application factory.
"""
