"""
Shopfront Backend: Pydantic Request/Response Schemas
====================================================

Schemas are separate from the SQLAlchemy models: they define the JSON
contract (wire names, presence rules) independently of the table layout.
"""
