"""
Domain layer - Core business entities and domain errors.

This layer contains the fundamental business objects and rules,
independent of any store adapter.
"""
