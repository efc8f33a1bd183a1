# Middleware package init
"""
Snippets API — Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    1. CORS: answers OPTIONS immediately and stamps headers on every
       response, including error responses produced further in
    2. Request ID: correlation id for logs and the X-Request-ID header
    3. Logging: one access line per request with status and duration
"""
