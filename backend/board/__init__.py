"""Secret Board — authenticated anonymous bulletin board.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
