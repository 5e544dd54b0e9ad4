from __future__ import annotations

import shutil
import socket
from pathlib import Path

import pytest
from hypothesis import settings

from guidectl.config import GuidectlConfig
from guidectl.corpus.loader import Corpus

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

FIXTURES = Path(__file__).resolve().parent / "fixtures"

settings.register_profile("guidectl", deadline=None, max_examples=60)
settings.load_profile("guidectl")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CI", "GUIDECTL_CONFIG", "RUN_ID"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def corpus_root(tmp_path: Path) -> Path:
    root = tmp_path / "corpus"
    shutil.copytree(FIXTURES / "corpus", root)
    return root


@pytest.fixture
def corpus(corpus_root: Path) -> Corpus:
    return Corpus(corpus_root, GuidectlConfig())

