"""
Domain package for recordbase.

Exports the record base class and the descriptor types derived from it.
"""

from recordbase.domain.models import IDENTITY, FieldDescriptor, Record, TableParams

__all__ = [
    "IDENTITY",
    "FieldDescriptor",
    "Record",
    "TableParams",
]
