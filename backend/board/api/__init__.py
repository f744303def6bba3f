"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Board pages are server-rendered HTML; health probes return JSON

Design Decisions:
    - Thin routes delegate to services
"""
