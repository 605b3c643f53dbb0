import logging
from typing import Iterator, Optional, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

logger = logging.getLogger(__name__)

RESULT_ITEM_TYPE = "s-search-result"
HTML_PARSER = "html.parser"


class BlockSequence:
    """
    Product blocks of one results page, in document order.

    Parsing is deferred until the first iteration and the parsed tree is kept,
    so the sequence can be walked any number of times. Markup the parser
    rejects outright is treated as a page with no blocks.
    """

    def __init__(self, markup: Optional[Union[str, bytes]], parser: str = HTML_PARSER):
        self.markup = markup
        self.parser = parser
        self._soup: Optional[BeautifulSoup] = None
        self._rejected = False

    def _parsed(self) -> Optional[BeautifulSoup]:
        if not self.markup or self._rejected:
            return None
        if self._soup is None:
            try:
                self._soup = BeautifulSoup(self.markup, self.parser)
            except ParserRejectedMarkup as exc:
                logger.warning(f"Parser rejected the page markup, no blocks located: {exc}")
                self._rejected = True
                return None
        return self._soup

    def __iter__(self) -> Iterator[Tag]:
        soup = self._parsed()
        if soup is None:
            return
        for element in soup.descendants:
            if isinstance(element, Tag) and element.get("data-component-type") == RESULT_ITEM_TYPE:
                yield element

    def __len__(self) -> int:
        return sum(1 for _ in self)


class BlockLocator:
    def __init__(self, parser: str = HTML_PARSER):
        self.parser = parser

    def locate(self, markup: Optional[Union[str, bytes]]) -> BlockSequence:
        return BlockSequence(markup, parser=self.parser)
