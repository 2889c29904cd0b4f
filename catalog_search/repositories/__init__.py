"""
Repository layer - Catalog store abstractions.

This layer provides the read-only catalog store interface and its
adapters, hiding storage details from the search engines.
"""
