"""
Shared base model for Blockweave.

Project snapshots exported by the editor use camelCase keys, while the Python
side works with snake_case attributes. Every snapshot model accepts both.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    """Base class for every model that round-trips through a project snapshot."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Timestamps(SnapshotModel):
    """Creation and modification times shared by variables, files and projects."""

    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the record was created"
    )

    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="When the record was last modified"
    )
