"""
DOM access for checks that inspect the HTML body.

Every call parses the body again and hands back a tree owned by the caller.
Nothing is cached between calls, so checks can run side by side on different
responses.
"""

import logging
from typing import Optional

from lxml import html as lxml_html
from lxml.html import HtmlElement

from .response import Response

logger = logging.getLogger(__name__)


def is_html_response(response: Response) -> bool:
    """Check whether the Content-Type header announces HTML."""
    content_type = response.header("Content-Type")
    return bool(content_type) and "text/html" in content_type.lower()


def try_parse(url: str, response: Response, check_name: str) -> Optional[HtmlElement]:
    """
    Parse the response body into an lxml document tree.

    Returns None when the response is not HTML, the body is blank, or the
    parser fails. Parser failures are logged, never raised.

    The body is handed to lxml as UTF-8 bytes with a matching parser, so an
    XML declaration carrying its own encoding (XHTML served as text/html) is
    accepted instead of rejected as a unicode string.
    """
    if not is_html_response(response):
        return None

    body = response.body
    if not body.strip():
        return None

    try:
        return lxml_html.document_fromstring(
            body.encode("utf-8"),
            parser=lxml_html.HTMLParser(encoding="utf-8"),
        )
    except Exception as e:
        logger.warning(
            f"DOM parsing failed for check '{check_name}' on {url}: "
            f"{type(e).__name__}: {e}"
        )
        return None
