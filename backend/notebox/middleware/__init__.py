"""
Notebox Backend — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every response, 429s included, carries X-Request-ID
    2. Rate Limit: reject abusive requests before any other processing
    3. Logging: log request details with the generated request ID
"""
