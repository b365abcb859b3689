"""API Layer — the surfaces through which callers reach the Store.

Invariants:
    - interception.py: httpx transport, the primary in-process boundary
    - routes/ + error_handlers.py: the same Dispatcher served over FastAPI for local use
    - Neither surface contains business logic (both delegate to services.dispatch)
"""
