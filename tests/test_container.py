"""
Unit tests for Container identity and document ids.
"""

import dataclasses
from collections import namedtuple
from dataclasses import dataclass

import pytest

from cosmosdb_client import Container, Identifiable, InvalidInputError
from cosmosdb_client.documents import get_id, to_json


class TestContainer:
    """Test Container construction."""

    def test_new(self):
        container = Container.new("d", "c")

        assert container.database == "d"
        assert container.container_name == "c"
        assert container == Container("d", "c")

    @pytest.mark.parametrize("database, name", [
        ("", "c"),
        ("d", ""),
        (None, "c"),
        ("d", None),
    ])
    def test_missing_names(self, database, name):
        with pytest.raises(InvalidInputError):
            Container.new(database, name)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            Container("", "c")

    def test_immutable(self):
        container = Container("d", "c")

        with pytest.raises(dataclasses.FrozenInstanceError):
            container.database = "other"

    def test_hashable(self):
        assert len({Container("d", "c"), Container("d", "c")}) == 1

    def test_paths(self):
        container = Container("d", "c")

        assert container.docs_path == "dbs/d/colls/c/docs"
        assert container.doc_path("42") == "dbs/d/colls/c/docs/42"


class Widget:
    def __init__(self, sku):
        self.sku = sku

    def get_id(self):
        return f"widget-{self.sku}"

    def to_dict(self):
        return {"id": self.get_id(), "sku": self.sku}


@dataclass
class Gadget:
    id: str
    name: str


class Plain:
    def __init__(self, id, name):
        self.id = id
        self.name = name


class TestDocumentId:
    """Test id resolution for documents."""

    def test_identifiable(self):
        widget = Widget(7)

        assert isinstance(widget, Identifiable)
        assert get_id(widget) == "widget-7"

    def test_mapping(self):
        assert get_id({"id": "a", "name": "b"}) == "a"

    def test_mapping_without_id(self):
        assert get_id({"name": "b"}) is None

    def test_attribute(self):
        assert get_id(Gadget("g1", "gizmo")) == "g1"

    def test_no_id(self):
        assert get_id(object()) is None

    def test_to_json(self):
        assert to_json({"id": "a"}) == {"id": "a"}
        assert to_json(Widget(1)) == {"id": "widget-1", "sku": 1}
        assert to_json(Gadget("g1", "gizmo")) == {"id": "g1", "name": "gizmo"}
        assert to_json(Plain("p1", "thing")) == {"id": "p1", "name": "thing"}


class TestToJsonErrors:
    """Test documents that cannot become JSON objects."""

    def test_namedtuple(self):
        Record = namedtuple("Record", "id name")

        assert to_json(Record("r1", "row")) == {"id": "r1", "name": "row"}

    def test_slots_without_dict(self):
        class Slotted:
            __slots__ = ("id",)

            def __init__(self, id):
                self.id = id

        with pytest.raises(InvalidInputError):
            to_json(Slotted("s1"))

    def test_to_dict_returning_non_dict(self):
        class Odd:
            def to_dict(self):
                return ["not", "a", "dict"]

        with pytest.raises(InvalidInputError):
            to_json(Odd())
