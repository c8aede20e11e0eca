from __future__ import annotations

from pydantic import Field

from ..value_objects.enums import ProjectStatus
from .base import Entity


class ProjectItem(Entity):
    name: str
    details: str = ""
    language: str = ""
    stars: int = Field(0, ge=0)
    status: ProjectStatus = ProjectStatus.IDEA
    progress: float = Field(0.0, ge=0.0, le=1.0, description="Completion ratio in [0, 1]")
