"""Domain layer — resource models, merge rules, and resolution.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, output, or config.
"""
