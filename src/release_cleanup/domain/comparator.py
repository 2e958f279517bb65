from itertools import zip_longest
from typing import Iterable

from src.release_cleanup.domain.errors import ExtractionEmpty
from src.release_cleanup.domain.extractor import extract_versions
from src.release_cleanup.domain.models import PageText, VersionToken


def _as_token(value: VersionToken | str) -> VersionToken:
    if isinstance(value, VersionToken):
        return value
    return VersionToken.parse(value)


def compare_versions(a: VersionToken | str, b: VersionToken | str) -> int:
    """Field-wise numeric comparison, missing positions count as 0.

    Suffixes are discarded while parsing, so ``1.0.0-rc1`` compares equal
    to ``1.0.0``. This is a known limitation of the ordering, not a bug.
    """
    left = _as_token(a).fields
    right = _as_token(b).fields
    for a_val, b_val in zip_longest(left, right, fillvalue=0):
        if a_val != b_val:
            return -1 if a_val < b_val else 1
    return 0


def version_sort_key(token: VersionToken | str) -> tuple[int, ...]:
    # Trailing zeros are dropped so that "1.2" and "1.2.0" share a key.
    fields = list(_as_token(token).fields)
    while fields and fields[-1] == 0:
        fields.pop()
    return tuple(fields)


def sort_versions(tokens: Iterable[VersionToken | str]) -> list[VersionToken]:
    return sorted((_as_token(t) for t in tokens), key=version_sort_key)


def oldest_version(tokens: Iterable[VersionToken | str]) -> VersionToken:
    ordered = sort_versions(tokens)
    if not ordered:
        raise ExtractionEmpty()
    return ordered[0]


def oldest(page_text: PageText) -> VersionToken:
    return oldest_version(extract_versions(page_text))
