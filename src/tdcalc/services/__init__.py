"""Service layer — runs the engine pipeline and returns ServiceResult.

Services may import from the domain layer.
They must never import from commands or output.
"""
