# Middleware package init
"""
Shopfront Backend: Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

Request ID runs first so every access-log line and error body carries the
correlation id.
"""
