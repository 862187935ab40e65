"""
Object store interfaces.
"""

from .object_store import ObjectStore, ObjectSummary

__all__ = ["ObjectStore", "ObjectSummary"]
