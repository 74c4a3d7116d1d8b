"""Domain layer: kinds, tags, descriptors, and errors.

This layer depends only on stdlib and pydantic.
It must never import from engine, services, commands, or config.
"""
