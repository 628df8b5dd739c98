"""
Snippetbox — Middleware Package
================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [Secure Headers] → [Session] → Route

    - Request ID first so every later log line can carry it
    - Logging sees the final status, including redirects and error pages
    - Secure headers are applied to every response, error pages included
    - Session is innermost: loaded right before the handler, committed
      right after it, so the Set-Cookie lands on the handler's response
"""
