import pytest

from mgm import (
    Collection,
    ConfigurationError,
    DefaultModel,
    StringField,
    coll,
    coll_name,
    collection_by_name,
)


class Doc(DefaultModel):
    name = StringField()


class AuditTrailEntry(DefaultModel):
    def collection_name(self):
        return "audit_log"


class PinnedDoc(DefaultModel):
    pinned = None

    def collection_name(self):
        return "ignored"

    def collection(self):
        return PinnedDoc.pinned


def test_type_name_is_normalized():
    assert coll_name(Doc) == "doc"
    assert coll_name(Doc(name="x")) == "doc"


def test_custom_collection_name_wins_over_type_name(connection):
    assert coll_name(AuditTrailEntry) == "audit_log"
    resolved = coll(AuditTrailEntry(), connection=connection)
    assert resolved.name == "audit_log"


def test_custom_collection_handle_is_used_verbatim(connection):
    handle = connection.collection("pinned_elsewhere")
    PinnedDoc.pinned = handle
    try:
        assert coll(PinnedDoc, connection=connection) is handle
    finally:
        PinnedDoc.pinned = None


def test_resolution_returns_a_fresh_handle_each_call(connection):
    first = coll(Doc, connection=connection)
    second = coll(Doc, connection=connection)
    assert isinstance(first, Collection)
    assert first is not second
    assert first.name == second.name == "doc"


def test_default_connection_is_used_when_none_given(default_connection):
    resolved = coll(Doc)
    assert resolved.connection is default_connection
    assert collection_by_name("other").name == "other"


def test_resolution_without_default_connection_fails():
    with pytest.raises(ConfigurationError):
        coll(Doc)
