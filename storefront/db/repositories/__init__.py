"""
Per-domain repository modules for database access.

`storefront.db.storage` is the facade the API and services call; each
repository owns the queries for one domain.
"""
