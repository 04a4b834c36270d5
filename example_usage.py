#!/usr/bin/env python3
"""
Basic usage examples for the Cosmos DB client library.

Reads COSMOS_DB_KEY and COSMOS_DB_HOST_URL from the environment and
works against the database and container named on the command line:

    python example_usage.py MyDatabase MyContainer
"""

import logging
import sys
import uuid

from cosmosdb_client import (
    Container,
    CosmosClient,
    CosmosClientError,
    CosmosConfig,
    OutcomeKind,
)


def show(label, kind, result):
    if kind is OutcomeKind.ERROR:
        print(f"   ✗ {label}: {result}")
        return
    mark = "✓" if kind is OutcomeKind.OK else "✗"
    print(f"   {mark} {label}: {kind.value}")
    print(f"   Request charge: {result.request_charge} RU")
    print(f"   Request duration: {result.request_duration} ms")


def main():
    """Run basic usage examples."""
    if len(sys.argv) != 3:
        print(__doc__)
        return 2

    logging.basicConfig(level=logging.INFO)
    container = Container(sys.argv[1], sys.argv[2])

    print("=== Cosmos DB Python Client Basic Usage Examples ===\n")

    try:
        config = CosmosConfig.from_env()
    except CosmosClientError as e:
        print(f"Configuration error: {e}")
        return 1

    print(f"1. Client created for: {config.base_url}\n")

    with CosmosClient(config) as client:
        item = {
            "id": f"ACME-HD-{uuid.uuid4()}",
            "name": "ACME hair dryer",
            "location": "Bottom of a cliff",
        }

        print("2. Creating a document...")
        kind, result = client.create_document(container, item, item["id"])
        show("Create", kind, result)
        print()

        print("3. Reading it back...")
        kind, result = client.get_document(container, item["id"], item["id"])
        show("Get", kind, result)
        if kind is OutcomeKind.OK:
            print(f"   Name: {result.body['name']}")
        print()

        print("4. Creating it again (expect a conflict)...")
        kind, result = client.create_document(container, item, item["id"])
        show("Create duplicate", kind, result)
        print()

        print("5. Querying by name...")
        kind, result = client.query(
            container,
            "SELECT * FROM c WHERE c.name = @name",
            [("name", item["name"])],
        )
        show("Query", kind, result)
        if kind is OutcomeKind.OK:
            print(f"   Matches: {result.count}")
        print()

        print("6. Listing documents two at a time...")
        token = None
        for page in range(1, 4):
            kind, result = client.get_documents(container, 2, token)
            show(f"Page {page}", kind, result)
            if kind is not OutcomeKind.OK:
                break
            for document in result.documents:
                print(f"     - {document['id']}")
            token = result.continuation_token
            if token is None:
                break
        print()

    print("=== Examples completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
