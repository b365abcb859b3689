"""todomock — in-process mock backend for labels and todos.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
