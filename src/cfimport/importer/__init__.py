"""Transform Contentful records and write them as site files."""

from cfimport.importer.runner import ImportResult, process
from cfimport.importer.transform import apply_more_tag, clean_entities, sluggify
from cfimport.importer.wpautop import wpautop

__all__ = [
    "ImportResult",
    "process",
    "apply_more_tag",
    "clean_entities",
    "sluggify",
    "wpautop",
]
