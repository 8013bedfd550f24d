"""Infrastructure layer — message catalog and reference storage adapters.

This layer depends on stdlib, pydantic models from the domain layer, and
SQLAlchemy. It must never import from services.
"""
