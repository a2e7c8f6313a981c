"""Domain models and entities.

Why:
- Pure, strict data structures live here (Pydantic v2).
- The domain knows nothing about HTTP or the CLI: only the problem's concepts.
"""
