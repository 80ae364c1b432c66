"""
Portfolio API — Middleware Package
===================================

Middleware chain (outermost first):
    Request → [Request ID] → [Logging] → [CORS] → Router

    - Request ID first so every later log line can quote it
    - Logging sees the final status, including OPTIONS short-circuits
    - CORS innermost, so headers land on routed responses and on the
      404/401/500 bodies produced by the exception handlers
"""
