"""
Database/container identity used to route every document operation.
"""

from dataclasses import dataclass

from .exceptions import InvalidInputError


@dataclass(frozen=True)
class Container:
    """A Cosmos DB container inside a database. Holds no network state."""

    database: str
    container_name: str

    def __post_init__(self):
        if not self.database:
            raise InvalidInputError("Cannot create a Container without a database name.")
        if not self.container_name:
            raise InvalidInputError("Cannot create a Container without a container name.")

    @classmethod
    def new(cls, database: str, container_name: str) -> "Container":
        return cls(database, container_name)

    @property
    def docs_path(self) -> str:
        return f"dbs/{self.database}/colls/{self.container_name}/docs"

    def doc_path(self, doc_id: str) -> str:
        return f"{self.docs_path}/{doc_id}"
