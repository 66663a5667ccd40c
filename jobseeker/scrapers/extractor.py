"""
Declarative Extraction

Generic first-match-wins evaluator shared by all job board extractors.
Each site is described as an ordered list of card strategies; each strategy
maps a container selector to ordered field rules.
"""

from typing import Callable, Iterator, List, Optional, Sequence
from dataclasses import dataclass, field
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from jobseeker.scrapers.base import JobSource, RawJobRecord
from jobseeker.scrapers.utils import classify_job_type, derive_external_id


# A matcher looks at one card and returns a value or None.
Matcher = Callable[[Tag], Optional[str]]


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def text_of(selector: str) -> Matcher:
    """Text of the first element matching ``selector`` with non-empty text."""
    def match(card: Tag) -> Optional[str]:
        for el in card.select(selector):
            value = _clean(el.get_text())
            if value:
                return value
        return None
    return match


def attr_of(selector: str, attr: str) -> Matcher:
    """Attribute of the first element matching ``selector`` that carries it."""
    def match(card: Tag) -> Optional[str]:
        for el in card.select(selector):
            value = _clean(el.get(attr))
            if value:
                return value
        return None
    return match


def link_text_where(predicate: Callable[[str], bool]) -> Matcher:
    """Text of the first non-empty link whose href satisfies ``predicate``."""
    def match(card: Tag) -> Optional[str]:
        for link in card.find_all("a"):
            text = _clean(link.get_text())
            if text and predicate(link.get("href") or ""):
                return text
        return None
    return match


def text_where(tag: str, predicate: Callable[[str], bool]) -> Matcher:
    """Text of the first ``tag`` element whose text satisfies ``predicate``."""
    def match(card: Tag) -> Optional[str]:
        for el in card.find_all(tag):
            text = _clean(el.get_text())
            if text and predicate(text):
                return text
        return None
    return match


@dataclass(frozen=True)
class FieldRule:
    """Ordered candidate matchers for one field."""

    matchers: Sequence[Matcher] = ()

    def first_match(self, card: Tag) -> str:
        """Return the first non-empty match, or an empty string."""
        for matcher in self.matchers:
            value = matcher(card)
            if value:
                return value
        return ""


def rule(*matchers: Matcher) -> FieldRule:
    return FieldRule(tuple(matchers))


EMPTY = FieldRule()


@dataclass(frozen=True)
class AnchorRule:
    """Link selector whose text, href and key attribute are read together."""

    selector: str
    key_attrs: Sequence[str] = ()

    def key_of(self, link: Tag) -> str:
        for attr in self.key_attrs:
            key = _clean(link.get(attr))
            if key:
                return key
        return ""


@dataclass(frozen=True)
class CardStrategy:
    """
    One job card layout variant.

    ``anchors`` are used when a site ties title, link and provider key to
    the same element: the first anchor with non-empty text wins and its
    href and key are taken together. Each anchor names its own key
    attributes. The plain field rules only fill whatever the anchors left
    empty.
    """

    container: str
    title: FieldRule = EMPTY
    url: FieldRule = EMPTY
    company: FieldRule = EMPTY
    location: FieldRule = EMPTY
    salary: FieldRule = EMPTY
    anchors: Sequence[AnchorRule] = field(default_factory=tuple)


class BaseExtractor:
    """
    Generic first-match-wins evaluator over a site's card strategies.

    Subclasses only declare ``source`` and ``strategies``.
    """

    source: JobSource
    strategies: List[CardStrategy] = []

    def extract(self, document: BeautifulSoup, page_url: str) -> Iterator[RawJobRecord]:
        """
        Walk the document and yield job records.

        Every strategy is applied to the whole document, so a posting that
        matches two container selectors is yielded twice.

        Args:
            document: Parsed search results page
            page_url: URL the page was fetched from, for resolving links

        Yields:
            RawJobRecord: Records with non-empty title and URL
        """
        for strategy in self.strategies:
            for card in document.select(strategy.container):
                record = self._extract_card(card, strategy, page_url)
                if record is not None:
                    yield record

    def _extract_card(
        self,
        card: Tag,
        strategy: CardStrategy,
        page_url: str,
    ) -> Optional[RawJobRecord]:
        title, href, key = self._from_anchors(card, strategy)
        if not title:
            title = strategy.title.first_match(card)
        if not href:
            href = strategy.url.first_match(card)

        try:
            url = urljoin(page_url, href) if href else ""
        except ValueError:
            # Malformed href, e.g. an unclosed IPv6 bracket
            return None
        if not title or not url:
            return None

        salary = strategy.salary.first_match(card)
        return RawJobRecord(
            source=self.source,
            url=url,
            title=title,
            company=strategy.company.first_match(card),
            location=strategy.location.first_match(card),
            salary_text=salary,
            external_id=derive_external_id(self.source.value, url, key or None),
            job_type=classify_job_type(title, salary, url),
        )

    @staticmethod
    def _from_anchors(card: Tag, strategy: CardStrategy):
        for anchor in strategy.anchors:
            for link in card.select(anchor.selector):
                title = _clean(link.get_text())
                if not title:
                    continue
                return title, _clean(link.get("href")) or "", anchor.key_of(link)
        return "", "", ""
