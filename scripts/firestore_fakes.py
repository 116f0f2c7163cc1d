"""In-memory stand-in for the parts of the Firestore client the backend uses.

Datetimes are stored as protobuf Timestamps, the way they come back over
the wire, so the read path has to convert them.
"""
import itertools
from datetime import datetime, timezone

from google.api_core import exceptions as gexc
from google.protobuf.timestamp_pb2 import Timestamp


def _to_wire(value):
    if isinstance(value, datetime):
        ts = Timestamp()
        ts.FromDatetime(value.astimezone(timezone.utc).replace(tzinfo=None))
        return ts
    if isinstance(value, dict):
        return {k: _to_wire(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_wire(v) for v in value]
    return value


class FakeSnapshot:
    def __init__(self, doc_id, data, reference):
        self.id = doc_id
        self._data = data
        self.reference = reference

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocumentRef:
    def __init__(self, client, path):
        self._client = client
        self._path = path

    @property
    def id(self):
        return self._path[-1]

    def collection(self, name):
        return FakeCollectionRef(self._client, self._path + (name,))

    def get(self):
        self._client._check("read")
        return FakeSnapshot(self.id, self._client.docs.get(self._path), self)

    def set(self, data, merge=False):
        self._client._check("write")
        stored = dict(self._client.docs.get(self._path) or {}) if merge else {}
        stored.update(_to_wire(data))
        self._client.docs[self._path] = stored

    def update(self, data):
        self._client._check("write")
        if self._path not in self._client.docs:
            raise gexc.NotFound(f"No document to update: {'/'.join(self._path)}")
        self._client.docs[self._path].update(_to_wire(data))

    def delete(self):
        self._client._check("write")
        self._client.docs.pop(self._path, None)


class FakeCollectionRef:
    def __init__(self, client, path):
        self._client = client
        self._path = path

    def document(self, doc_id=None):
        if doc_id is None:
            doc_id = f"doc{next(self._client._ids)}"
        return FakeDocumentRef(self._client, self._path + (doc_id,))

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return None, ref

    def stream(self):
        self._client._check("read")
        for path, data in list(self._client.docs.items()):
            if path[:-1] == self._path:
                yield FakeSnapshot(path[-1], data, FakeDocumentRef(self._client, path))


class FakeFirestore:
    """
    read_error / write_error: exception raised by every read / write call,
    e.g. ``gexc.PermissionDenied("Missing or insufficient permissions.")``.
    """

    def __init__(self, read_error=None, write_error=None):
        self.docs = {}
        self.read_error = read_error
        self.write_error = write_error
        self._ids = itertools.count(1)

    def _check(self, kind):
        error = self.read_error if kind == "read" else self.write_error
        if error is not None:
            raise error

    def collection(self, name):
        return FakeCollectionRef(self, (name,))


def denied():
    return gexc.PermissionDenied("Missing or insufficient permissions.")
