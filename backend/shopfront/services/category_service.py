"""
Shopfront Backend: Category Service
===================================

What:  CRUD for categories; each category is returned with its products.
How:   All behaviour lives in NamedResourceService.
"""

from shopfront.models import Category
from shopfront.schemas.category import CategoryResponse
from shopfront.services.named_resource import NamedResourceService


class CategoryService(NamedResourceService[Category, CategoryResponse]):
    model = Category
    name_field = "category_name"
    resource = "category"
    plural = "categories"
    response_model = CategoryResponse


category_service = CategoryService()
