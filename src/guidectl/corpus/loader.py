from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path

from ..config import GuidectlConfig
from ..errors import ScriptError
from ..exit_codes import ERR_DOCS
from .guide import load_guide
from .models import Guide
from .registry import Registry, parse_registry


class Corpus:
    """Lazily parsed view of one guide corpus on disk."""

    def __init__(self, root: Path, config: GuidectlConfig | None = None) -> None:
        self.root = root.resolve()
        self.config = config or GuidectlConfig()
        self._registry: Registry | None = None
        self._registry_loaded = False
        self._guides: dict[Path, Guide] = {}

    @property
    def readme_path(self) -> Path:
        return self.root / self.config.readme

    @property
    def contributing_path(self) -> Path:
        return self.root / self.config.contributing

    def rel(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def registry(self) -> Registry | None:
        if not self._registry_loaded:
            self._registry_loaded = True
            if self.readme_path.is_file():
                self._registry = parse_registry(self.readme_path.read_text(encoding="utf-8"))
        return self._registry

    def _excluded(self, rel: str) -> bool:
        return any(fnmatch(rel, pattern) for pattern in self.config.excluded_files)

    def guide_paths(self) -> list[Path]:
        found: dict[str, Path] = {}
        for pattern in self.config.guides:
            for path in self.root.glob(pattern):
                if not path.is_file():
                    continue
                rel = self.rel(path)
                if self._excluded(rel):
                    continue
                found[rel] = path.resolve()
        return [found[key] for key in sorted(found)]

    def guide(self, path: Path) -> Guide:
        resolved = (path if path.is_absolute() else self.root / path).resolve()
        if resolved not in self._guides:
            self._guides[resolved] = load_guide(resolved, self.config)
        return self._guides[resolved]

    def guides(self) -> list[Guide]:
        return [self.guide(path) for path in self.guide_paths()]

    def resolve_guide(self, ref: str) -> Path:
        """Resolve a guide by file path or by its registry name."""
        candidate = Path(ref)
        for path in (candidate, self.root / candidate):
            if path.is_file():
                return path.resolve()
        registry = self.registry()
        entry = registry.get(ref) if registry is not None else None
        if entry is not None and entry.link:
            linked = (self.root / entry.link.split("#", 1)[0]).resolve()
            if linked.is_file():
                return linked
        raise ScriptError(f"guide not found: {ref}", ERR_DOCS, kind="guide_missing")
