"""Domain entities and business rules.

This package contains the store's value objects and the rules that define
*what* matches a query, independent from *where* they are applied
(services, repositories, routers).
"""
