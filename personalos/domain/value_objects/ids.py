from typing import NewType
from uuid import uuid4

EntityId = NewType("EntityId", str)


def new_entity_id() -> EntityId:
    return EntityId(str(uuid4()))
