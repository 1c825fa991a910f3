"""
store/models.py -- Write acknowledgements returned by the document store.

Pattern: Data class (pure data container, zero logic). Reads return plain
dicts because documents are schemaless; writes return these so routes can
relay exactly what the store reports.

Layer rule: no imports from api/, auth/, or core/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class InsertResult:
    inserted_id: str | None
    acknowledged: bool = True


@dataclass
class DeleteResult:
    deleted_count: int
    acknowledged: bool = True
