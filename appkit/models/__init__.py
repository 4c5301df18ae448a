"""
Models package for appkit.
"""

from .descriptor import BASE_APP, AppDescriptor, extend, normalize_id
from .metadata import Asset, MetadataDocument
from .tool import ToolSpec

__all__ = ["AppDescriptor", "BASE_APP", "extend", "normalize_id", "Asset", "MetadataDocument", "ToolSpec"]
