# Services package init
"""
Blog API: Services Layer
========================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - BlogService: the six blog operations and storage-error conversion
    - pagination:  page/limit parsing and neighbour-page links

Services can be unit-tested with a mocked AsyncSession and no HTTP stack.
"""
