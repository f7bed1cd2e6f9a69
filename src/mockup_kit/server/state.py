"""In-memory record of the last app state seen by the sync server."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MockupRef(BaseModel):
    """A mockup as listed by the app client."""

    title: str
    path: str


class SessionState(BaseModel):
    """Last-known app state.

    ``project_root`` is fixed when the server starts. Everything else is
    replaced by inbound messages only, and nothing is persisted.
    """

    model_config = ConfigDict(populate_by_name=True)

    project_root: str = Field(alias="projectRoot", frozen=True)
    has_synced: bool = Field(default=False, alias="hasSynced")
    path: Optional[str] = None
    mockups: List[MockupRef] = Field(default_factory=list)

    def apply_update(self, path: Optional[str], mockups: List[MockupRef]) -> None:
        self.path = path
        self.mockups = list(mockups)
        self.has_synced = True

    def navigate(self, path: Optional[str]) -> None:
        self.path = path

    def snapshot(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


__all__ = ["MockupRef", "SessionState"]
