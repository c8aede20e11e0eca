from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ..value_objects.enums import KnowledgeCategory
from .base import Entity, utc_now


class CodeSnippet(Entity):
    title: str
    language: str
    code: str
    summary: str = ""
    category: KnowledgeCategory = KnowledgeCategory.SWIFT
    date: datetime = Field(default_factory=utc_now)
