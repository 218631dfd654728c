"""Mock utilities for Firestore and Auth."""

import unittest.mock
from typing import Any, Optional

from mockfirestore import CollectionReference, Query
from mockfirestore.document import DocumentReference


class MockFieldFilter:
    def __init__(self, field_path: str, op_string: str, value: Any) -> None:
        self.field_path = field_path
        self.op_string = op_string
        self.value = value


class MockBatch:
    def __init__(self, db: Any) -> None:
        self.db = db
        self.updates: list[tuple[Any, Any]] = []
        self.commit = unittest.mock.MagicMock(side_effect=self._real_commit)

    def update(self, ref: Any, data: Any) -> None:
        self.updates.append((ref, data))

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        # For set with merge=True, it's like update.
        # For simplicity in tests, we just update.
        self.updates.append((ref, data))

    def delete(self, ref: Any) -> None:
        self.updates.append((ref, "DELETE"))

    def _real_commit(self) -> None:
        for ref, data in self.updates:
            if data == "DELETE":
                ref.delete()
            else:
                ref.update(data)
        self.updates = []


class MockTransaction:
    """Applies transactional writes immediately.

    ``firestore.transactional`` is patched to an identity decorator in tests,
    so nothing ever commits; writes land as soon as they are issued.
    """

    def __init__(self) -> None:
        self.writes: list[tuple[str, Any, Any]] = []

    def update(self, ref: Any, data: dict[str, Any]) -> None:
        self.writes.append(("update", ref, data))
        ref.update(data)

    def set(self, ref: Any, data: dict[str, Any], merge: bool = False) -> None:
        self.writes.append(("set", ref, data))
        ref.set(data, merge=merge)

    def delete(self, ref: Any) -> None:
        self.writes.append(("delete", ref, None))
        ref.delete()


class MockFirestoreBuilder:
    """Builder to modularize mockfirestore and firebase_admin patching."""

    @staticmethod
    def patch_db_read() -> None:
        """Apply monkeypatches to mockfirestore to support FieldFilter and equality."""

        def collection_where(
            self: Any,
            field_path: Optional[str] = None,
            op_string: Optional[str] = None,
            value: Any = None,
            filter: Any = None,
        ) -> Any:  # noqa: E501
            if filter:
                return self._where(filter.field_path, filter.op_string, filter.value)
            return self._where(field_path, op_string, value)

        if not hasattr(CollectionReference, "_where"):
            CollectionReference._where = CollectionReference.where
            CollectionReference.where = collection_where

        def query_where(
            self: Any,
            field_path: Optional[str] = None,
            op_string: Optional[str] = None,
            value: Any = None,
            filter: Any = None,
        ) -> Any:
            if filter:
                return self._where(filter.field_path, filter.op_string, filter.value)
            return self._where(field_path, op_string, value)

        if not hasattr(Query, "_where"):
            Query._where = Query.where
            Query.where = query_where

        def doc_ref_eq(self: Any, other: Any) -> bool:
            if not isinstance(other, DocumentReference):
                return False
            return self._path == other._path

        if not hasattr(DocumentReference, "_orig_eq"):
            DocumentReference._orig_eq = DocumentReference.__eq__
            DocumentReference.__eq__ = doc_ref_eq
            DocumentReference.__hash__ = lambda self: hash(tuple(self._path))

        # Patch DocumentReference.get to handle transaction argument
        if not hasattr(DocumentReference, "_orig_get"):
            DocumentReference._orig_get = DocumentReference.get

            def doc_ref_get(self: Any, transaction: Any = None) -> Any:
                """Handle transaction argument in get."""
                return self._orig_get()

            DocumentReference.get = doc_ref_get

    @staticmethod
    def build_firestore_module(db: Any) -> unittest.mock.MagicMock:
        """Create a stand-in for ``firebase_admin.firestore`` backed by ``db``."""
        module = unittest.mock.MagicMock()
        module.client.return_value = db
        module.FieldFilter = MockFieldFilter
        module.Query.DESCENDING = "DESCENDING"
        module.Query.ASCENDING = "ASCENDING"
        module.SERVER_TIMESTAMP = "2024-01-01T00:00:00+00:00"
        module.transactional = lambda func: func
        return module


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter and transactions."""
    MockFirestoreBuilder.patch_db_read()
