"""Infrastructure Layer — database, credential store and logging.

Invariants:
    - Implements the protocols declared in core/repository_protocols.py
    - Infrastructure failures mapped to core/errors.py types before leaving this layer
"""
