"""Domain models and value types.

Pure, strict data structures (Pydantic v2 and enums). The domain does not
know about HTTP, ctypes or the terminal: only the concepts of the problem.
"""
