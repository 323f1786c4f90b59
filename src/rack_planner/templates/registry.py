"""Template registry for discovering and applying rack templates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from rack_planner.exceptions import RackFileError, TemplateError
from rack_planner.rack.definition import Rack
from rack_planner.rack.serializer import RackSerializer
from rack_planner.rack.validator import validate_rack

logger = logging.getLogger(__name__)


class TemplateRegistry:
    """Discover, search and load rack templates from multiple directories.

    Templates are YAML files with a ``meta`` section next to the usual
    ``rack`` and ``devices`` sections of a rack file. The built-in library
    inside the package is always searched first.
    """

    def __init__(self, template_dirs: list[Path] | None = None):
        self._dirs: list[Path] = []

        builtin_dir = Path(__file__).parent / "library"
        if builtin_dir.exists():
            self._dirs.append(builtin_dir)

        if template_dirs:
            self._dirs.extend(template_dirs)

        self._cache: list[dict[str, Any]] | None = None

    def _template_files(self) -> list[Path]:
        files: list[Path] = []
        for directory in self._dirs:
            files.extend(sorted(directory.glob("*.yml")))
            files.extend(sorted(directory.glob("*.yaml")))
        return files

    def _find_template_file(self, name: str) -> Path:
        candidates = [name, f"{name}.yml", f"{name}.yaml"]
        for directory in self._dirs:
            for candidate in candidates:
                path = directory / candidate
                if path.exists():
                    return path
        raise TemplateError(f"Template '{name}' not found in: {[str(d) for d in self._dirs]}")

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        try:
            with open(path) as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise TemplateError(f"Template '{path.stem}' has invalid YAML: {e}") from e
        if not content or not isinstance(content, dict):
            raise TemplateError(f"Template '{path.stem}' is empty or invalid")
        return content

    @property
    def templates(self) -> list[dict[str, Any]]:
        """Metadata of every readable template (cached)."""
        if self._cache is None:
            found: list[dict[str, Any]] = []
            for path in self._template_files():
                try:
                    raw = self._read(path)
                except TemplateError as e:
                    logger.warning("Skipping template %s: %s", path, e)
                    continue
                meta = raw.get("meta", {})
                found.append({
                    "name": meta.get("name", path.stem),
                    "title": meta.get("title", path.stem),
                    "description": meta.get("description", ""),
                    "category": meta.get("category", "custom"),
                    "tags": meta.get("tags", []),
                    "size_u": raw.get("rack", {}).get("size_u"),
                    "device_count": len(raw.get("devices", [])),
                    "path": str(path),
                })
            self._cache = found
        return self._cache

    def list_names(self) -> list[str]:
        return [t["name"] for t in self.templates]

    def get_info(self, name: str) -> dict[str, Any] | None:
        for t in self.templates:
            if t["name"] == name:
                return t
        return None

    def search(self, keyword: str) -> list[dict[str, Any]]:
        """Search templates by keyword in name, description, category or tags."""
        keyword_lower = keyword.lower()
        results = []
        for t in self.templates:
            if keyword_lower in t["name"].lower() or keyword_lower in t["title"].lower():
                results.append(t)
            elif keyword_lower in t["description"].lower() or keyword_lower == t["category"]:
                results.append(t)
            elif any(keyword_lower in tag.lower() for tag in t["tags"]):
                results.append(t)
        return results

    def load(self, name: str, rack_name: str | None = None) -> Rack:
        """Build a Rack from a template.

        Raises:
            TemplateError: If the template is missing, unreadable, or its
                layout is not legal (out of bounds or overlapping devices).
        """
        path = self._find_template_file(name)
        raw = self._read(path)
        meta = raw.get("meta", {})

        try:
            rack = RackSerializer.from_dict(raw)
        except RackFileError as e:
            raise TemplateError(f"Template '{name}' is invalid: {e}") from e

        result = validate_rack(rack)
        if not result.valid:
            raise TemplateError(f"Template '{name}' has an illegal layout: {'; '.join(result.errors)}")

        rack = rack.model_copy(update={"name": rack_name or meta.get("title", name)})
        logger.info("Loaded template '%s' (%d devices)", name, len(rack.devices))
        return rack

    def invalidate_cache(self) -> None:
        self._cache = None
