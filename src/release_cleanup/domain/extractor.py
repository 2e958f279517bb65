import re
from typing import Callable, Pattern

from bs4 import BeautifulSoup

from src.release_cleanup.domain.errors import ExtractionEmpty
from src.release_cleanup.domain.models import PageSnapshot, PageText, VersionSet

# Three dotted digit groups plus an optional suffix such as -rc1, .post2 or a1.
# ASCII only: CJK text touching a version is a boundary, not part of the token.
VERSION_PATTERN: Pattern[str] = re.compile(r"\b\d+\.\d+\.\d+[\w.-]*\b", re.ASCII)

RELEASE_SELECTOR = '[class*="release"], [class*="package-snippet"]'
HEADING_SELECTOR = 'a[href*="/project/"], h2, h3'

ExtractionStrategy = Callable[[PageSnapshot], list[str]]


def _first_match_per_fragment(fragments: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for fragment in fragments:
        match = VERSION_PATTERN.search(fragment or "")
        if match:
            found.append(match.group(0))
    return found


def scan_release_fragments(snapshot: PageSnapshot) -> list[str]:
    return _first_match_per_fragment(snapshot.release_fragments)


def scan_heading_fragments(snapshot: PageSnapshot) -> list[str]:
    return _first_match_per_fragment(snapshot.heading_fragments)


def scan_full_text(snapshot: PageSnapshot) -> list[str]:
    return VERSION_PATTERN.findall(snapshot.full_text or "")


# Targeted scans first; the whole-page scan is the last resort.
EXTRACTION_STRATEGIES: tuple[tuple[str, ExtractionStrategy], ...] = (
    ("release_fragments", scan_release_fragments),
    ("heading_fragments", scan_heading_fragments),
    ("full_text", scan_full_text),
)


def to_snapshot(page_text: PageText) -> PageSnapshot:
    if isinstance(page_text, PageSnapshot):
        return page_text
    if isinstance(page_text, str):
        return PageSnapshot(full_text=page_text)
    return PageSnapshot(full_text="\n".join(str(fragment) for fragment in page_text))


def snapshot_from_html(html: str) -> PageSnapshot:
    """Build a snapshot of the human-visible text of an HTML document."""
    soup = BeautifulSoup(html or "", "html.parser")
    for hidden in soup(["script", "style", "noscript", "template"]):
        hidden.decompose()

    release_fragments = tuple(el.get_text(" ", strip=True) for el in soup.select(RELEASE_SELECTOR))
    heading_fragments = tuple(el.get_text(" ", strip=True) for el in soup.select(HEADING_SELECTOR))
    body = soup.body or soup
    return PageSnapshot(
        release_fragments=release_fragments,
        heading_fragments=heading_fragments,
        full_text=body.get_text(" ", strip=True),
    )


def extract_versions_with_strategy(page_text: PageText) -> tuple[str, VersionSet]:
    snapshot = to_snapshot(page_text)
    for name, strategy in EXTRACTION_STRATEGIES:
        found = strategy(snapshot)
        if found:
            return name, VersionSet(found)
    raise ExtractionEmpty()


def extract_versions(page_text: PageText) -> VersionSet:
    _, versions = extract_versions_with_strategy(page_text)
    return versions
