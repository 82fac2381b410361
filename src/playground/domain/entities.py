"""
Domain Entities

Entities with identity and a lifecycle. Only the item store keeps state
across requests; executions are value objects.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Item:
    """
    An entry in the flat-file item store.

    Attributes:
        id: Random UUID assigned on creation
        title: Non-empty title
        description: Optional free text
        created_at: ISO 8601 creation timestamp
        updated_at: ISO 8601 timestamp of the last update
    """

    id: str
    title: str
    description: Optional[str]
    created_at: str
    updated_at: str

    @classmethod
    def create(cls, title: str, description: Optional[str] = None) -> "Item":
        now = _utc_now_iso()
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def updated(self, title: Optional[str] = None, description: Optional[str] = None) -> "Item":
        """Return a copy with non-empty fields applied and a fresh timestamp."""
        return replace(
            self,
            title=title if isinstance(title, str) and title else self.title,
            description=description if isinstance(description, str) else self.description,
            updated_at=_utc_now_iso(),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description"),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )
