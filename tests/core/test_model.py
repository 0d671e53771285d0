import pytest
from bson import ObjectId

from mgm import (
    BooleanField,
    DefaultModel,
    FloatField,
    IntegerField,
    Model,
    ModelConfigurationError,
    StringField,
)


class Doc(DefaultModel):
    name = StringField(max_length=20)
    age = IntegerField(default=0)


class ReadingListEntry(DefaultModel):
    title = StringField(key="t")
    rating = FloatField()
    finished = BooleanField()


def test_default_fields_come_before_declared_fields():
    assert list(Doc._meta.fields) == ["object_id", "created_at", "updated_at", "name", "age"]
    assert Doc._meta.collection_name == "doc"
    assert ReadingListEntry._meta.collection_name == "reading_list_entry"


def test_field_groups_are_abstract():
    assert DefaultModel._meta.abstract is True
    assert Doc._meta.abstract is False


def test_defaults_and_conversion():
    doc = Doc(name="check", age="10")
    assert doc.age == 10
    assert doc.created_at == 0
    assert doc.updated_at == 0
    with pytest.raises(ValueError):
        doc.age = "ten"
    with pytest.raises(ValueError):
        doc.name = "x" * 21


def test_unknown_keyword_is_rejected():
    with pytest.raises(TypeError):
        Doc(nickname="bob")


def test_to_document_uses_storage_keys_and_omits_unset_id():
    entry = ReadingListEntry(title="Dune", rating=4.5)
    document = entry.to_document()
    assert "_id" not in document
    assert document == {
        "create_time": 0,
        "last_modify_time": 0,
        "t": "Dune",
        "rating": 4.5,
        "finished": False,
    }

    object_id = ObjectId()
    entry.set_id(object_id)
    assert entry.to_document()["_id"] == object_id


def test_from_document_restores_fields_and_identifier():
    object_id = ObjectId()
    doc = Doc.from_document(
        {"_id": object_id, "create_time": 10, "last_modify_time": 20, "name": "check", "age": 3, "extra": 1}
    )
    assert doc.get_id() == object_id
    assert doc.get_id_str() == str(object_id)
    assert (doc.created_at, doc.updated_at) == (10, 20)
    assert doc.to_dict()["name"] == "check"


def test_duplicate_document_keys_are_rejected():
    with pytest.raises(ModelConfigurationError):

        class Clash(Model):
            first = StringField(key="value")
            second = StringField(key="value")


def test_subclass_can_override_inherited_field():
    class Tagged(Doc):
        age = IntegerField(default=18)

    assert Tagged().age == 18
    assert list(Tagged._meta.fields)[-1] == "age"


def test_unbound_field_reports_configuration_error():
    with pytest.raises(ModelConfigurationError, match="name is not set"):
        StringField().require_name()


def test_load_document_is_all_or_nothing():
    doc = Doc(name="Ada", age=36)
    with pytest.raises(ValueError):
        doc.load_document({"name": "Grace", "age": "unknown"})
    assert doc.name == "Ada"
    assert doc.age == 36
