"""
Local persistence store: typed collections serialized as JSON blobs under
fixed keys of a key-value backend.

Reads never fail: missing, unavailable or malformed data falls back to the
collection's default and is logged. Writes log and re-raise so the caller
can report a failed save.
"""

import copy
import json
import logging
import os
import random
import tempfile
import time
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from config import DEFAULTS, STORAGE
from models import AnalysisResult, CompetitorAnalysis, Project, SavedContent, SavedKeyword

logger = logging.getLogger(__name__)

BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


class QuotaExceededError(Exception):
    """Raised by a backend when a write would exceed its size quota."""


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Millisecond timestamp plus a random suffix, both base 36.

    Unique enough for a single-user local store, not for anything shared.
    """
    stamp = to_base36(int(time.time() * 1000))
    suffix = "".join(random.choice(BASE36) for _ in range(5))
    return stamp + suffix


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ── Backends ──────────────────────────────────────────────────────────


class MemoryStorage:
    def __init__(self, quota_bytes: Optional[int] = None):
        self.items: dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(len(v) for k, v in self.items.items() if k != key)
            if used + len(value) > self.quota_bytes:
                raise QuotaExceededError(f"Setting '{key}' exceeded the {self.quota_bytes} byte quota")
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage:
    """Key-value backend persisted as one JSON object in a file."""

    def __init__(self, path: str | Path = STORAGE["default_path"]):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _load_for_write(self) -> dict[str, str]:
        try:
            return self._load()
        except ValueError as e:
            logger.warning("Discarding unreadable storage file %s: %s", self.path, e)
            return {}

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Readers see either the old file or the new one, never a partial write.
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.path.parent,
            prefix=f".{self.path.name}.", suffix=".tmp", delete=False,
        ) as tmp:
            tmp.write(json.dumps(data, indent=2))
        try:
            os.replace(tmp.name, self.path)
        except OSError:
            os.unlink(tmp.name)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load_for_write()
        data[key] = value
        self._dump(data)

    def remove_item(self, key: str) -> None:
        data = self._load_for_write()
        if key in data:
            del data[key]
            self._dump(data)


# ── Store ─────────────────────────────────────────────────────────────


class LocalStore:
    """Typed get/save/delete operations over the fixed storage keys.

    ``backend=None`` models a render with no browser storage: reads return
    defaults and writes are skipped.
    """

    def __init__(self, backend=None, clock: Callable[[], str] = utc_now_iso,
                 max_recent_analyses: int = STORAGE["max_recent_analyses"]):
        self.backend = backend
        self.clock = clock
        self.keys = STORAGE["keys"]
        self.max_recent_analyses = max_recent_analyses

    # generic helpers

    def _read(self, key: str, default):
        if self.backend is None:
            return copy.deepcopy(default)
        try:
            raw = self.backend.get_item(key)
            return json.loads(raw) if raw else copy.deepcopy(default)
        except Exception as e:
            logger.warning("Error retrieving %s from storage: %s", key, e)
            return copy.deepcopy(default)

    def _write(self, key: str, value) -> None:
        if self.backend is None:
            return
        try:
            self.backend.set_item(key, json.dumps(value))
        except Exception as e:
            logger.error("Error saving %s to storage: %s", key, e)
            raise

    def _read_collection(self, key: str, entity_cls) -> list:
        raw = self._read(key, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring %s: expected a list, found %s", key, type(raw).__name__)
            return []
        items = []
        for entry in raw:
            try:
                items.append(entity_cls.from_dict(entry))
            except (TypeError, AttributeError) as e:
                logger.warning("Skipping malformed %s entry in %s: %s", entity_cls.__name__, key, e)
        return items

    def _write_collection(self, key: str, items: list) -> None:
        self._write(key, [item.to_dict() for item in items])

    def _read_object(self, key: str, default: dict) -> dict:
        value = self._read(key, default)
        if not isinstance(value, dict):
            logger.warning("Ignoring %s: expected an object, found %s", key, type(value).__name__)
            return copy.deepcopy(default)
        return value

    @staticmethod
    def _index_of(items: list, entity_id: str) -> int:
        return next((i for i, item in enumerate(items) if item.id == entity_id), -1)

    def _delete(self, key: str, entity_cls, entity_id: str) -> None:
        items = self._read_collection(key, entity_cls)
        self._write_collection(key, [item for item in items if item.id != entity_id])

    # projects

    def get_projects(self) -> list[Project]:
        return self._read_collection(self.keys["projects"], Project)

    def save_project(self, project: Project) -> Project:
        projects = self.get_projects()
        index = self._index_of(projects, project.id)
        now = self.clock()
        if index >= 0:
            stored = replace(project, date_updated=now)
            projects[index] = stored
        else:
            stored = replace(project, date_created=now, date_updated=now)
            projects.append(stored)
        self._write_collection(self.keys["projects"], projects)
        return stored

    def delete_project(self, project_id: str) -> None:
        self._delete(self.keys["projects"], Project, project_id)

    # analyses

    def get_recent_analyses(self) -> list[AnalysisResult]:
        return self._read_collection(self.keys["recent_analyses"], AnalysisResult)

    def save_analysis_result(self, analysis: AnalysisResult) -> AnalysisResult:
        analyses = self.get_recent_analyses()
        index = self._index_of(analyses, analysis.id)
        if index >= 0:
            analyses[index] = analysis
        else:
            analyses.insert(0, analysis)
            while len(analyses) > self.max_recent_analyses:
                evicted = analyses.pop()
                logger.debug("Evicted analysis %s (%s)", evicted.id, evicted.url)
        self._write_collection(self.keys["recent_analyses"], analyses)
        return analysis

    def delete_analysis_result(self, analysis_id: str) -> None:
        self._delete(self.keys["recent_analyses"], AnalysisResult, analysis_id)

    # keywords

    def get_saved_keywords(self) -> list[SavedKeyword]:
        return self._read_collection(self.keys["saved_keywords"], SavedKeyword)

    def save_keyword(self, keyword: SavedKeyword) -> SavedKeyword:
        keywords = self.get_saved_keywords()
        index = self._index_of(keywords, keyword.id)
        if index >= 0:
            stored = keyword
            keywords[index] = stored
        else:
            stored = replace(keyword, date_added=self.clock())
            keywords.append(stored)
        self._write_collection(self.keys["saved_keywords"], keywords)
        return stored

    def delete_keyword(self, keyword_id: str) -> None:
        self._delete(self.keys["saved_keywords"], SavedKeyword, keyword_id)

    # content

    def get_saved_content(self) -> list[SavedContent]:
        return self._read_collection(self.keys["saved_content"], SavedContent)

    def save_content(self, content: SavedContent) -> SavedContent:
        contents = self.get_saved_content()
        index = self._index_of(contents, content.id)
        now = self.clock()
        if index >= 0:
            stored = replace(content, date_updated=now)
            contents[index] = stored
        else:
            stored = replace(content, date_created=now, date_updated=now)
            contents.append(stored)
        self._write_collection(self.keys["saved_content"], contents)
        return stored

    def delete_content(self, content_id: str) -> None:
        self._delete(self.keys["saved_content"], SavedContent, content_id)

    # competitor analyses

    def get_competitor_analyses(self) -> list[CompetitorAnalysis]:
        return self._read_collection(self.keys["competitor_analyses"], CompetitorAnalysis)

    def save_competitor_analysis(self, analysis: CompetitorAnalysis) -> CompetitorAnalysis:
        analyses = self.get_competitor_analyses()
        index = self._index_of(analyses, analysis.id)
        if index >= 0:
            stored = analysis
            analyses[index] = stored
        else:
            stored = replace(analysis, date_created=self.clock())
            analyses.append(stored)
        self._write_collection(self.keys["competitor_analyses"], analyses)
        return stored

    def delete_competitor_analysis(self, analysis_id: str) -> None:
        self._delete(self.keys["competitor_analyses"], CompetitorAnalysis, analysis_id)

    # settings, credentials, endpoints

    def get_credentials(self) -> dict:
        return self._read_object(self.keys["credentials"], DEFAULTS["credentials"])

    def save_credentials(self, credentials: dict) -> None:
        self._write(self.keys["credentials"], credentials)

    def get_api_endpoints(self) -> dict:
        return self._read_object(self.keys["api_endpoints"], DEFAULTS["api_endpoints"])

    def save_api_endpoints(self, endpoints: dict) -> None:
        self._write(self.keys["api_endpoints"], endpoints)

    def get_user_settings(self) -> dict:
        return self._read_object(self.keys["settings"], DEFAULTS["settings"])

    def save_user_settings(self, settings: dict) -> None:
        self._write(self.keys["settings"], settings)
