# Middleware package init
"""
SampleWeb Backend - Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    - Request ID runs first so the access log line carries the ID.
    - Logging reports the handler, its resolved view, status and duration
      on the way back out.
"""
