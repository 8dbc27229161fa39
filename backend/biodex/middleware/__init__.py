# Middleware package init
"""
Biodex Backend — Middleware Package
=====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the logging middleware and every exception
    handler can read the correlation ID from the ContextVar.
"""
