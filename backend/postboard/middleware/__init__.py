# Middleware package init
"""
Postboard Backend — Middleware Package
========================================

Middleware Chain:
    Request → [CORS] → [Request ID] → [Logging] → [GZip] → Route Handler

    CORS is outermost so preflight requests are answered before anything
    else runs. Request ID comes before Logging so access lines carry it.
"""
