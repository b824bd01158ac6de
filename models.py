"""
Entities kept in the local store.

Each entity serializes to the camelCase JSON the dashboard has always
written, so existing storage blobs load unchanged.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional


def _pick(data: dict, mapping: dict) -> dict:
    return {attr: data[key] for attr, key in mapping.items() if key in data}


class Entity:
    """Base for stored entities.

    Keys the dataclass does not declare are kept in ``extra`` and written
    back unchanged, so blobs saved by other versions of the dashboard keep
    their fields across a load and save.
    """

    # attribute name -> JSON key
    JSON_KEYS: dict[str, str] = {}

    def to_dict(self) -> dict:
        out = dict(self.extra)
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is None and f.default is None:
                continue
            out[self.JSON_KEYS.get(f.name, f.name)] = value
        return out

    @classmethod
    def from_dict(cls, data: dict):
        mapping = {f.name: cls.JSON_KEYS.get(f.name, f.name) for f in fields(cls) if f.name != "extra"}
        known = set(mapping.values())
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(**_pick(data, mapping), extra=extra)


@dataclass
class Project(Entity):
    id: str
    name: str = ""
    url: str = ""
    date_created: str = ""
    date_updated: str = ""
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    JSON_KEYS = {"date_created": "dateCreated", "date_updated": "dateUpdated"}


@dataclass
class AnalysisResult(Entity):
    id: str
    url: str = ""
    date_analyzed: str = ""
    score: float = 0
    task_id: Optional[str] = None
    summary_data: Optional[Any] = None
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    JSON_KEYS = {"date_analyzed": "dateAnalyzed", "task_id": "taskId", "summary_data": "summaryData"}


@dataclass
class SavedKeyword(Entity):
    id: str
    keyword: str = ""
    date_added: str = ""
    volume: Optional[int] = None
    difficulty: Optional[int] = None
    cpc: Optional[float] = None
    related: Optional[list[str]] = None
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    JSON_KEYS = {"date_added": "dateAdded"}


@dataclass
class SavedContent(Entity):
    id: str
    title: str = ""
    content: str = ""
    target_keywords: list[str] = field(default_factory=list)
    date_created: str = ""
    date_updated: str = ""
    score: Optional[float] = None
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    JSON_KEYS = {
        "target_keywords": "targetKeywords",
        "date_created": "dateCreated",
        "date_updated": "dateUpdated",
    }


@dataclass
class CompetitorAnalysis(Entity):
    id: str
    date_created: str = ""
    main_domain: str = ""
    competitor_domains: list[str] = field(default_factory=list)
    task_ids: Optional[list[str]] = None
    results: Optional[Any] = None
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    JSON_KEYS = {
        "date_created": "dateCreated",
        "main_domain": "mainDomain",
        "competitor_domains": "competitorDomains",
        "task_ids": "taskIds",
    }
