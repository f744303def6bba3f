"""Services Layer — request orchestration between core and infrastructure.

Invariants:
    - Services receive collaborators by injection; they never build their own sessions
"""
