# Routes package init
"""
Shopfront Backend: API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory (resource routers are mounted under settings.api_prefix, default /api):
    - products.py:    GET/POST  /products,   GET/PUT/DELETE /products/{id}
    - categories.py:  GET/POST  /categories, GET/PUT/DELETE /categories/{id}
    - tags.py:        GET/POST  /tags,       GET/PUT/DELETE /tags/{id}
    - health.py:      GET       /health

Routes stay thin: extract path/body, call the service, return the result
with the right status code. Errors are raised by services and rendered by
the global exception handlers in main.py.
"""
