"""Domain layer — record models, validation outcomes, paging math.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, or config.
"""
