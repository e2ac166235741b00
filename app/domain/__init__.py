"""Pure domain pieces: the variant registry and path-to-body dispatch.

Kept free of FastAPI/HTTP concerns so the server and the smoke runner can
both derive their behaviour from the same table.
"""
__all__ = ["variants"]
