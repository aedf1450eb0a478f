"""Domain layer — identities, periods, reports and templates.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
