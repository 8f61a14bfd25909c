from typing import Annotated
from bson import ObjectId
from pydantic import BeforeValidator

PyObjectId = Annotated[str, BeforeValidator(str)]


def new_object_id() -> str:
    """Server-issued identity, assigned before the first write."""
    return str(ObjectId())
