from .dynamodb_bus_repository import DynamoDbBusRepository
from .in_memory_bus_repository import InMemoryBusRepository

__all__ = [
    "DynamoDbBusRepository",
    "InMemoryBusRepository",
]
