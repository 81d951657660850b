# Middleware package init
"""
StackIt Backend: Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so every log line can carry the ID and the caller.
    Responses travel the chain in reverse, which is when the logging
    middleware measures status and duration.
"""
