import pytest

from response_checker import Response

TEST_URL = "http://example.com/test"


def html_document(head: str = "", body: str = "") -> str:
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


def xhtml_document(head: str = "", body: str = "") -> str:
    """XHTML 1.0 page with an XML declaration, as served by older CMSes."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
        '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">\n'
        '<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="en" lang="en">'
        f"<head>{head}</head><body>{body}</body></html>"
    )


def html_response(html: str, status_code: int = 200) -> Response:
    return Response(status_code, {"Content-Type": "text/html; charset=utf-8"}, html)


class ExplodingTree:
    """Stands in for a parsed document whose traversal blows up."""

    def __init__(self, message: str = "Simulated node access error"):
        self.message = message

    def xpath(self, query):
        raise RuntimeError(self.message)


@pytest.fixture
def exploding_dom(monkeypatch):
    """Make dom.try_parse return a tree that raises on query."""
    monkeypatch.setattr(
        "response_checker.dom.try_parse",
        lambda url, response, check_name: ExplodingTree(),
    )
