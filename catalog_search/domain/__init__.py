"""
Domain layer - Core business entities and domain logic.

This layer contains the catalog search value objects and error types,
independent of any infrastructure or framework concerns.
"""
