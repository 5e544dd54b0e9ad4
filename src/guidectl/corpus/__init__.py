"""Corpus model: registry table, guide documents and the markdown reader beneath them."""

from __future__ import annotations

from .loader import Corpus
from .models import CodeExample, Guide, GuideEntry, GuideStatus, Practice, TocEntry

__all__ = ["CodeExample", "Corpus", "Guide", "GuideEntry", "GuideStatus", "Practice", "TocEntry"]
