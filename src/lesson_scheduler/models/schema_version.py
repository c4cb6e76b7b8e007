"""
Schema versioning for saved schedule snapshots.

Snapshots written by ``save_schedule`` carry a schema version so older
files (lessons only) can still be loaded.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class SchemaVersion(Enum):
    """
    Schedule snapshot versions.

    Versions:
        V1_0: Lessons only
        V1_1: Lessons plus students and instructors
    """

    V1_0 = "1.0"
    V1_1 = "1.1"


CURRENT_SCHEMA_VERSION = SchemaVersion.V1_1


@dataclass
class VersionedData:
    """
    Data with version information.

    Attributes:
        schema_version: Version identifier
        data: Snapshot content

    Examples:
        >>> versioned = VersionedData(
        ...     schema_version=SchemaVersion.V1_1.value,
        ...     data={"lessons": [], "students": [], "instructors": []}
        ... )
    """

    schema_version: str
    data: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "data": self.data
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'VersionedData':
        """
        Create instance from dictionary.

        Files without a ``schema_version`` key are treated as V1_0.
        """
        return cls(
            schema_version=d.get("schema_version", SchemaVersion.V1_0.value),
            data=d.get("data", {})
        )

    def section(self, name: str) -> list:
        """Return a list section of the snapshot, empty when absent (e.g. V1_0 rosters)."""
        return list(self.data.get(name) or [])
