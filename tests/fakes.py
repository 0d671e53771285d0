"""
In-memory stand-ins for the pymongo client, database, collection and session.

Only the calls mgm makes are implemented. Writes made inside a transaction
are staged on the session and applied on commit; reads inside the
transaction see them, reads outside do not.
"""

from __future__ import annotations

import copy
from collections import defaultdict
from typing import Any, Callable, Dict, List, Mapping, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, InvalidOperation, ServerSelectionTimeoutError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

Documents = Dict[Any, Dict[str, Any]]


def _matches(document: Mapping[str, Any], query_filter: Mapping[str, Any]) -> bool:
    return all(document.get(key) == value for key, value in query_filter.items())


class FakeSession:
    def __init__(self, client: "FakeMongoClient") -> None:
        self.client = client
        self.pending: List[tuple[str, Callable[[Documents], Any]]] = []
        self.in_transaction = False
        self.has_ended = False
        self.commits = 0
        self.aborts = 0

    def start_transaction(self, **options: Any) -> None:
        if self.client.fail_start_transaction:
            raise InvalidOperation("transactions are not supported by this deployment")
        if self.has_ended:
            raise InvalidOperation("Cannot use ended session")
        if self.in_transaction:
            raise InvalidOperation("Transaction already in progress")
        self.in_transaction = True
        self.pending = []

    def commit_transaction(self) -> None:
        if not self.in_transaction:
            raise InvalidOperation("No transaction started")
        for key, operation in self.pending:
            operation(self.client.store[key])
        self.pending = []
        self.in_transaction = False
        self.commits += 1

    def abort_transaction(self) -> None:
        if not self.in_transaction:
            raise InvalidOperation("No transaction started")
        self.pending = []
        self.in_transaction = False
        self.aborts += 1

    def end_session(self) -> None:
        if self.in_transaction:
            self.abort_transaction()
        self.has_ended = True


class FakeCollection:
    def __init__(self, client: "FakeMongoClient", database: str, name: str) -> None:
        self.client = client
        self.database = database
        self.name = name
        self.key = f"{database}.{name}"

    def _view(self, session: Optional[FakeSession]) -> Documents:
        documents = self.client.store[self.key]
        if session is None or not session.in_transaction:
            return documents
        documents = copy.deepcopy(documents)
        for key, operation in session.pending:
            if key == self.key:
                operation(documents)
        return documents

    def _write(self, operation: Callable[[Documents], Any], session: Optional[FakeSession]) -> Any:
        if session is not None and session.in_transaction:
            result = operation(self._view(session))
            session.pending.append((self.key, operation))
            return result
        return operation(self.client.store[self.key])

    def _record(self, method: str, session: Optional[FakeSession]) -> None:
        self.client.calls.append((method, self.name, session))

    def insert_one(self, document: Dict[str, Any], session: Optional[FakeSession] = None, **kwargs: Any):
        self._record("insert_one", session)
        document.setdefault("_id", ObjectId())
        stored = copy.deepcopy(document)

        def operation(documents: Documents) -> None:
            if stored["_id"] in documents:
                raise DuplicateKeyError(f"duplicate key: {stored['_id']}")
            documents[stored["_id"]] = copy.deepcopy(stored)

        self._write(operation, session)
        return InsertOneResult(stored["_id"], True)

    def update_one(
        self,
        query_filter: Mapping[str, Any],
        update: Mapping[str, Any],
        session: Optional[FakeSession] = None,
        **kwargs: Any,
    ):
        self._record("update_one", session)
        changes = copy.deepcopy(dict(update.get("$set", {})))
        query_filter = dict(query_filter)

        def operation(documents: Documents) -> Dict[str, int]:
            for document in documents.values():
                if _matches(document, query_filter):
                    modified = any(document.get(k) != v for k, v in changes.items())
                    document.update(copy.deepcopy(changes))
                    return {"n": 1, "nModified": int(modified)}
            return {"n": 0, "nModified": 0}

        return UpdateResult(self._write(operation, session), True)

    def delete_one(self, query_filter: Mapping[str, Any], session: Optional[FakeSession] = None, **kwargs: Any):
        self._record("delete_one", session)
        query_filter = dict(query_filter)

        def operation(documents: Documents) -> Dict[str, int]:
            for key, document in list(documents.items()):
                if _matches(document, query_filter):
                    del documents[key]
                    return {"n": 1}
            return {"n": 0}

        return DeleteResult(self._write(operation, session), True)

    def find(self, query_filter: Mapping[str, Any] | None = None, session: Optional[FakeSession] = None, **kwargs: Any):
        self._record("find", session)
        query_filter = query_filter or {}
        return [
            copy.deepcopy(document)
            for document in self._view(session).values()
            if _matches(document, query_filter)
        ]

    def find_one(self, query_filter: Mapping[str, Any] | None = None, session: Optional[FakeSession] = None, **kwargs: Any):
        results = self.find(query_filter, session=session)
        return results[0] if results else None

    def aggregate(self, pipeline: List[Mapping[str, Any]], session: Optional[FakeSession] = None, **kwargs: Any):
        self._record("aggregate", session)
        documents = [copy.deepcopy(document) for document in self._view(session).values()]
        for stage in pipeline:
            if "$match" in stage:
                documents = [document for document in documents if _matches(document, stage["$match"])]
        return documents

    def count_documents(self, query_filter: Mapping[str, Any], session: Optional[FakeSession] = None, **kwargs: Any) -> int:
        self._record("count_documents", session)
        return sum(1 for document in self._view(session).values() if _matches(document, query_filter))

    def drop(self) -> None:
        self.client.store[self.key].clear()


class FakeDatabase:
    def __init__(self, client: "FakeMongoClient", name: str) -> None:
        self.client = client
        self.name = name

    def get_collection(self, name: str) -> FakeCollection:
        return FakeCollection(self.client, self.name, name)

    __getitem__ = get_collection


class FakeMongoClient:
    def __init__(self) -> None:
        self.store: Dict[str, Documents] = defaultdict(dict)
        self.calls: List[tuple[str, str, Any]] = []
        self.sessions: List[FakeSession] = []
        self.fail_start_session = False
        self.fail_start_transaction = False
        self.closed = False

    def start_session(self, **kwargs: Any) -> FakeSession:
        if self.fail_start_session:
            raise ServerSelectionTimeoutError("No replica set members available")
        session = FakeSession(self)
        self.sessions.append(session)
        return session

    def get_database(self, name: str) -> FakeDatabase:
        return FakeDatabase(self, name)

    __getitem__ = get_database

    def close(self) -> None:
        self.closed = True

    def storage_calls(self, *methods: str) -> List[tuple[str, str, Any]]:
        return [call for call in self.calls if call[0] in methods]
