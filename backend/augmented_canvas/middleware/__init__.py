"""
Augmented Canvas Backend — Middleware Package
==============================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

The request ID is set first so the access log line and any error body
produced by a route carry the same ID.
"""
