from __future__ import annotations

import pytest

from guidectl.corpus.models import GuideEntry, GuideStatus


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Available", GuideStatus.AVAILABLE),
        ("✅ Available", GuideStatus.AVAILABLE),
        ("**available**", GuideStatus.AVAILABLE),
        ("Coming Soon", GuideStatus.COMING_SOON),
        ("🚧 Coming Soon", GuideStatus.COMING_SOON),
        ("coming-soon", GuideStatus.COMING_SOON),
    ],
)
def test_status_parse_accepts_decorated_labels(raw: str, expected: GuideStatus) -> None:
    assert GuideStatus.parse(raw) is expected


@pytest.mark.parametrize("raw", ["", "Draft", "Available soon", "unavailable"])
def test_status_parse_rejects_unknown_labels(raw: str) -> None:
    with pytest.raises(ValueError, match="unknown guide status"):
        GuideStatus.parse(raw)


def test_available_entry_requires_link() -> None:
    with pytest.raises(ValueError, match="must link"):
        GuideEntry(name="Go", status=GuideStatus.AVAILABLE)
    with pytest.raises(ValueError, match="must link"):
        GuideEntry(name="Go", status=GuideStatus.AVAILABLE, link="  ")


def test_coming_soon_entry_rejects_link() -> None:
    with pytest.raises(ValueError, match="must not carry a link"):
        GuideEntry(name="Go", status=GuideStatus.COMING_SOON, link="go.md")


def test_entry_normalizes_fields() -> None:
    entry = GuideEntry(name="  Rust ", status=GuideStatus.COMING_SOON, link="", topics=(" Ownership ", "", "Traits"))
    assert entry.name == "Rust"
    assert entry.link is None
    assert entry.topics == ("Ownership", "Traits")
    assert entry.key == "rust"


def test_entry_requires_name() -> None:
    with pytest.raises(ValueError, match="name cannot be empty"):
        GuideEntry(name=" ", status=GuideStatus.COMING_SOON)


def test_publish_moves_entry_to_available() -> None:
    entry = GuideEntry(name="Rust", status=GuideStatus.COMING_SOON, topics=("Ownership",))
    published = entry.publish("rust.md")
    assert published.status is GuideStatus.AVAILABLE
    assert published.link == "rust.md"
    assert published.topics == ("Ownership",)
    assert entry.status is GuideStatus.COMING_SOON
    with pytest.raises(ValueError, match="already available"):
        published.publish("other.md")


def test_entry_payload() -> None:
    entry = GuideEntry(name="Python", status=GuideStatus.AVAILABLE, link="python.md", topics=("Style",))
    assert entry.to_payload() == {"name": "Python", "status": "available", "link": "python.md", "topics": ["Style"]}
    assert GuideStatus.COMING_SOON.label == "Coming Soon"
