# Middleware package init
"""
Blog API: Middleware Package
============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID available to every later log line
    2. Logging: one access line with status and duration
    3. GZip / CORS: Starlette's stock middleware

    The order is reversed for responses, so the access log sees the final
    status code and the request ID lands in the response headers.
"""
