# Middleware package init
"""
Catalogue API - Middleware Package
===================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the id; responses
    flow back through the same chain in reverse order.
"""
