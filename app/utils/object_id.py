"""Helpers for MongoDB ObjectId handling."""
from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: str, not_found: str) -> ObjectId:
    """
    Convert a string id into an ObjectId.

    Args:
        value: Id as received from a client
        not_found: Error message used when the id is malformed

    Raises:
        ValueError: If the value is not a valid ObjectId

    Example:
        >>> parse_object_id("65a1b2c3d4e5f60718293a4b", "Round not found")
        ObjectId('65a1b2c3d4e5f60718293a4b')
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValueError(not_found)
