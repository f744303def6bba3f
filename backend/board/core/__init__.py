"""Core Layer — domain logic for tracking identifiers, one-time tokens, forms and display.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - IO reaches core only through the Protocols in repository_protocols.py

Design Decisions:
    - Functional core separated from imperative shell
"""
