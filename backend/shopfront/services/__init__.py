# Services package init
"""
Shopfront Backend: Services Layer
=================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the request's AsyncSession, issue statements, and
       raise the application exceptions that main.py maps to status codes.

Service Inventory:
    - ProductService:        Products with their category and tag associations
    - NamedResourceService:  Shared CRUD for single-name lookup tables
    - CategoryService:       Categories (NamedResourceService)
    - TagService:            Tags (NamedResourceService)

Services never commit; the get_db_session() dependency commits after a
successful handler and rolls back when one raises.
"""
