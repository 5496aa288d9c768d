"""
Shopfront Backend: Tag Service
==============================

What:  CRUD for tags; each tag is returned with the products carrying it.
"""

from shopfront.models import Tag
from shopfront.schemas.tag import TagResponse
from shopfront.services.named_resource import NamedResourceService


class TagService(NamedResourceService[Tag, TagResponse]):
    model = Tag
    name_field = "tag_name"
    resource = "tag"
    plural = "tags"
    response_model = TagResponse


tag_service = TagService()
