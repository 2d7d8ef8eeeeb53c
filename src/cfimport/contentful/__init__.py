"""Contentful API access and entry mapping."""

from cfimport.contentful.client import ContentfulClient, ContentfulError
from cfimport.contentful.entries import PostRecord, entry_to_record

__all__ = [
    "ContentfulClient",
    "ContentfulError",
    "PostRecord",
    "entry_to_record",
]
