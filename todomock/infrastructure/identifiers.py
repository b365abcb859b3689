"""Identifier source — random UUID4 strings for new records."""

import uuid

from todomock.core.domain_types import RecordId


def new_id() -> RecordId:
    return RecordId(str(uuid.uuid4()))
