"""
Unit tests for request building.
"""

import json
from collections import namedtuple
from unittest.mock import patch
from urllib.parse import unquote_plus

import pytest

from cosmosdb_client import InvalidInputError, InvalidKeyError, Operation, RequestBuilder, sign
from cosmosdb_client.config import CosmosConfig
from cosmosdb_client.request import build_query_body

from conftest import TEST_DATE, TEST_HOST, TEST_KEY

BASE_URL = f"https://{TEST_HOST}"


class TestRequestBuilder:
    """Test header and body assembly for each operation."""

    @pytest.fixture
    def builder(self, config):
        return RequestBuilder(config)

    def test_get_item(self, builder, container):
        envelope = builder.build(container, Operation.GET_ITEM, id="item-1",
                                 partition_key="pk-1", date=TEST_DATE)

        assert envelope.method == "GET"
        assert envelope.url == f"{BASE_URL}/dbs/TestItems/colls/Items/docs/item-1"
        assert envelope.body is None
        assert envelope.header("Accept") == "application/json"
        assert envelope.header("x-ms-date") == TEST_DATE
        assert envelope.header("x-ms-version") == "2018-12-31"
        assert envelope.header("x-ms-documentdb-partitionkey") == '["pk-1"]'
        assert envelope.header("x-ms-max-item-count") is None

    def test_get_item_signature(self, builder, container):
        envelope = builder.build(container, Operation.GET_ITEM, id="item-1",
                                 partition_key="pk-1", date=TEST_DATE)

        expected = sign("get", "dbs/TestItems/colls/Items/docs/item-1", TEST_DATE, TEST_KEY)
        assert envelope.header("Authorization") == expected

    def test_single_authorization_header(self, builder, container):
        envelope = builder.build(container, Operation.GET_ITEMS, date=TEST_DATE)

        names = [name for name, _ in envelope.headers]
        assert names.count("Authorization") == 1

    def test_partition_key_non_string(self, builder, container):
        envelope = builder.build(container, Operation.GET_ITEM, id="1",
                                 partition_key=42, date=TEST_DATE)

        assert json.loads(envelope.header("x-ms-documentdb-partitionkey")) == [42]

    def test_get_items(self, builder, container):
        envelope = builder.build(container, Operation.GET_ITEMS, max_item_count=25, date=TEST_DATE)

        assert envelope.method == "GET"
        assert envelope.url == f"{BASE_URL}/dbs/TestItems/colls/Items/docs"
        assert envelope.header("x-ms-max-item-count") == "25"
        assert envelope.header("x-ms-continuation") is None
        assert envelope.header("x-ms-documentdb-partitionkey") is None

    def test_get_items_continuation(self, builder, container):
        token = {"token": "Hj8rAI2HN48CAAAAAAAAAA==", "range": {"min": "", "max": "FF"}}
        envelope = builder.build(container, Operation.GET_ITEMS, continuation_token=token,
                                 date=TEST_DATE)

        header = envelope.header("x-ms-continuation")
        assert header == json.dumps(token, separators=(',', ':'))
        assert json.loads(header) == token

    @pytest.mark.parametrize("count", [0, -1, 1001, "100", True])
    def test_get_items_invalid_count(self, builder, container, count):
        with pytest.raises(InvalidInputError):
            builder.build(container, Operation.GET_ITEMS, max_item_count=count)

    def test_query(self, builder, container):
        params = [("id", "ACME-HD-WOLF01234"), ("name", "ACME hair dryer")]
        envelope = builder.build(container, Operation.QUERY,
                                 query_text="SELECT * FROM c WHERE c.id = @id and c.name = @name",
                                 params=params, date=TEST_DATE)

        assert envelope.method == "POST"
        assert envelope.url == f"{BASE_URL}/dbs/TestItems/colls/Items/docs"
        assert envelope.header("x-ms-documentdb-isquery") == "true"
        assert envelope.header("Content-Type") == "application/query+json"
        assert json.loads(envelope.body) == {
            "query": "SELECT * FROM c WHERE c.id = @id and c.name = @name",
            "parameters": [
                {"name": "@id", "value": "ACME-HD-WOLF01234"},
                {"name": "@name", "value": "ACME hair dryer"},
            ],
        }
        expected = sign("post", "dbs/TestItems/colls/Items/docs", TEST_DATE, TEST_KEY)
        assert envelope.header("Authorization") == expected

    def test_query_missing_text(self, builder, container):
        with pytest.raises(InvalidInputError):
            builder.build(container, Operation.QUERY, query_text="")

    def test_create_item(self, builder, container):
        item = {"id": "ACME-HD-WOLF01234", "name": "ACME hair dryer"}
        envelope = builder.build(container, Operation.CREATE_ITEM, document=item,
                                 partition_key="ACME hair dryer", date=TEST_DATE)

        assert envelope.method == "POST"
        assert envelope.url == f"{BASE_URL}/dbs/TestItems/colls/Items/docs"
        assert envelope.header("Content-Type") == "application/json"
        assert envelope.header("x-ms-documentdb-partitionkey") == '["ACME hair dryer"]'
        assert json.loads(envelope.body) == item

    def test_create_item_without_id(self, builder, container):
        with pytest.raises(InvalidInputError):
            builder.build(container, Operation.CREATE_ITEM, document={"name": "x"},
                          partition_key="x")

    def test_create_item_without_document(self, builder, container):
        with pytest.raises(InvalidInputError):
            builder.build(container, Operation.CREATE_ITEM, partition_key="x")

    @patch('cosmosdb_client.request.sign')
    def test_missing_values_checked_before_signing(self, mock_sign, builder, container):
        with pytest.raises(InvalidInputError):
            builder.build(None, Operation.GET_ITEM, id="1", partition_key="1")

        with pytest.raises(InvalidInputError):
            builder.build(container, Operation.GET_ITEM, id=None, partition_key="1")

        with pytest.raises(InvalidInputError):
            builder.build(container, Operation.GET_ITEM, id="1", partition_key=None)

        with pytest.raises(InvalidInputError):
            builder.build(container, Operation.CREATE_ITEM, document={"id": "1"})

        mock_sign.assert_not_called()

    def test_invalid_key(self, container):
        builder = RequestBuilder(CosmosConfig("not base64!!", TEST_HOST))

        with pytest.raises(InvalidKeyError):
            builder.build(container, Operation.GET_ITEMS)

    def test_fresh_date_per_request(self, builder, container):
        with patch('cosmosdb_client.request.rfc7231_date',
                   side_effect=[TEST_DATE, "wed, 02 nov 1994 08:12:31 gmt"]):
            first = builder.build(container, Operation.GET_ITEMS)
            second = builder.build(container, Operation.GET_ITEMS)

        assert first.header("x-ms-date") != second.header("x-ms-date")
        assert first.header("Authorization") != second.header("Authorization")
        assert unquote_plus(first.header("Authorization")).startswith("type=master&ver=1.0&sig=")


class TestQueryBody:
    """Test query body construction."""

    def test_mapping_params(self):
        body = build_query_body("SELECT * FROM c WHERE c.id = @id", {"id": "1"})

        assert body["parameters"] == [{"name": "@id", "value": "1"}]

    def test_prefixed_names_kept(self):
        body = build_query_body("q", [("@id", "1")])

        assert body["parameters"] == [{"name": "@id", "value": "1"}]

    def test_no_params(self):
        assert build_query_body("SELECT * FROM c", None) == {
            "query": "SELECT * FROM c",
            "parameters": [],
        }


class Sku:
    """Document whose id comes only from get_id()."""

    def __init__(self, sku):
        self.sku = sku

    def get_id(self):
        return f"sku-{self.sku}"


class Slotted:
    __slots__ = ("id", "name")

    def __init__(self, id, name):
        self.id = id
        self.name = name


Record = namedtuple("Record", "id name")


class TestCreateBody:
    """Test how documents become create request bodies."""

    @pytest.fixture
    def builder(self, config):
        return RequestBuilder(config)

    def test_id_from_get_id_written_to_body(self, builder, container):
        envelope = builder.build(container, Operation.CREATE_ITEM, document=Sku(7),
                                 partition_key="sku-7", date=TEST_DATE)

        assert json.loads(envelope.body) == {"sku": 7, "id": "sku-7"}

    def test_existing_body_id_kept(self, builder, container):
        envelope = builder.build(container, Operation.CREATE_ITEM, document={"id": "a"},
                                 partition_key="a", date=TEST_DATE)

        assert json.loads(envelope.body) == {"id": "a"}

    def test_namedtuple_document(self, builder, container):
        envelope = builder.build(container, Operation.CREATE_ITEM, document=Record("a", "b"),
                                 partition_key="a", date=TEST_DATE)

        assert json.loads(envelope.body) == {"id": "a", "name": "b"}

    @patch('cosmosdb_client.request.sign')
    def test_unconvertible_document_rejected_before_signing(self, mock_sign, builder, container):
        with pytest.raises(InvalidInputError):
            builder.build(container, Operation.CREATE_ITEM, document=Slotted("a", "b"),
                          partition_key="a")

        mock_sign.assert_not_called()

    @patch('cosmosdb_client.request.sign')
    def test_unserializable_value_rejected_before_signing(self, mock_sign, builder, container):
        with pytest.raises(InvalidInputError):
            builder.build(container, Operation.CREATE_ITEM,
                          document={"id": "a", "when": object()}, partition_key="a")

        mock_sign.assert_not_called()


class TestQueryParamNames:
    """Test parameter name handling for non-string keys."""

    def test_non_string_key(self):
        body = build_query_body("SELECT * FROM c WHERE c.n = @1", [(1, "one")])

        assert body["parameters"] == [{"name": "@1", "value": "one"}]
