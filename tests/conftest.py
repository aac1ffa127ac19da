"""Shared Firestore stand-ins for the test suite."""

import pytest


class DummySnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return dict(self._data)


class DummyQuery:
    def __init__(self, client, path):
        self.client = client
        self.path = path
        self.filters = []
        self.order = None

    def where(self, filter=None):
        self.filters.append(filter)
        return self

    def order_by(self, field_path):
        self.order = field_path
        return self

    def document(self, doc_id):
        return DummyDocument(self.client, f"{self.path}/{doc_id}")

    def stream(self):
        self.client.queries.append(self)
        if self.path in self.client.failing:
            raise RuntimeError("firestore unavailable")
        docs = list(self.client.data.get(self.path, []))
        for f in self.filters:
            docs = [d for d in docs if d.to_dict().get(f.field_path) == f.value]
        if self.order:
            docs.sort(key=lambda d: d.to_dict().get(self.order, ""))
        return iter(docs)


class DummyDocument:
    def __init__(self, client, path):
        self.client = client
        self.path = path

    def collection(self, name):
        return DummyQuery(self.client, f"{self.path}/{name}")


class DummyClient:
    """Minimal Firestore client serving in-memory documents keyed by path."""

    def __init__(self, data=None, failing=()):
        self.data = {
            path: [DummySnapshot(doc_id, doc) for doc_id, doc in docs.items()]
            for path, docs in (data or {}).items()
        }
        self.failing = set(failing)
        self.queries = []

    def collection(self, name):
        return DummyQuery(self, name)


@pytest.fixture
def dummy_client():
    return DummyClient
