import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence, Union

_LEADING_DIGITS = re.compile(r"\d+", re.ASCII)


def parse_fields(raw: str) -> tuple[int, ...]:
    """Split ``raw`` on dots and read the leading digits of every segment.

    A segment without leading digits (``"rc1"``, ``""``) parses to 0, so a
    malformed token never raises.
    """
    fields: list[int] = []
    for segment in (raw or "").split("."):
        match = _LEADING_DIGITS.match(segment.strip())
        fields.append(int(match.group(0)) if match else 0)
    return tuple(fields)


@dataclass(frozen=True)
class VersionToken:
    raw: str
    fields: tuple[int, ...]

    @classmethod
    def parse(cls, raw: str) -> "VersionToken":
        return cls(raw=raw, fields=parse_fields(raw))

    def __str__(self) -> str:
        return self.raw


class VersionSet:
    """Tokens found in one page, keyed by ``raw`` in discovery order."""

    def __init__(self, raws: Iterable[str] = ()) -> None:
        self._tokens: dict[str, VersionToken] = {}
        for raw in raws:
            self.add(raw)

    def add(self, raw: str) -> VersionToken:
        token = self._tokens.get(raw)
        if token is None:
            token = VersionToken.parse(raw)
            self._tokens[raw] = token
        return token

    @property
    def raws(self) -> tuple[str, ...]:
        return tuple(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[VersionToken]:
        return iter(self._tokens.values())

    def __contains__(self, raw: object) -> bool:
        return raw in self._tokens

    def __repr__(self) -> str:
        return f"VersionSet({list(self._tokens)!r})"


@dataclass(frozen=True)
class PageSnapshot:
    release_fragments: tuple[str, ...] = field(default_factory=tuple)
    heading_fragments: tuple[str, ...] = field(default_factory=tuple)
    full_text: str = ""


# What a page-text provider may hand to the extractor.
PageText = Union[str, Sequence[str], PageSnapshot]


@dataclass(frozen=True)
class DeletionResult:
    version: str
    method: str
    confirmed: bool
    warning: str | None = None
