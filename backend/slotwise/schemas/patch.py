from typing import TypeVar

from pydantic import BaseModel

RecordT = TypeVar("RecordT", bound=BaseModel)


def patch_fields(patch: BaseModel) -> dict:
    """Fields the caller explicitly set on a patch; everything else is left untouched."""
    return patch.model_dump(exclude_unset=True)


def apply_patch(record: RecordT, patch: BaseModel) -> RecordT:
    changes = patch_fields(patch)
    if not changes:
        return record
    merged = {**record.model_dump(), **changes}
    return type(record).model_validate(merged)
