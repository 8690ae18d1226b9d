"""
Response checks.

Each check looks at one (url, response) pair and returns a list of Finding
objects. Content problems, non-HTML bodies and parser failures are reported
as findings; a check never raises for them.

The title, meta description and h1 checks share one evaluation sequence
(missing -> multiple -> empty -> length -> success), implemented once in
evaluate_element() and parameterised by an ElementRule.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from lxml.html import HtmlElement

from . import dom
from .models import (
    CheckConfig,
    ElementCheckConfig,
    Finding,
    FindingLevel,
    H1CheckConfig,
    ImageAltTextCheckConfig,
    IssueType,
    MetaDescriptionCheckConfig,
    StatusCodeCheckConfig,
    TitleCheckConfig,
)
from .response import Response

logger = logging.getLogger(__name__)

SKIPPED_MESSAGE = "Skipped Check: Response was not parseable HTML or a parsing error occurred."
MISSING_SRC_PLACEHOLDER = "[Image source missing]"


class CheckInterface(ABC):
    """
    Base contract for all checks.

    Settings are given either as a ready config model or as keyword
    overrides of the check's defaults:

        TitleCheck(min_length=None, max_length=None)
        TitleCheck(config=TitleCheckConfig(max_length=70))
    """

    config_class: Type[CheckConfig] = CheckConfig

    def __init__(self, config: Optional[CheckConfig] = None, **settings: Any):
        if config is not None and settings:
            raise TypeError("Pass either a config object or keyword settings, not both")
        if config is None:
            config = self.config_class(**settings)
        elif not isinstance(config, self.config_class):
            raise TypeError(
                f"{type(self).__name__} expects {self.config_class.__name__}, "
                f"got {type(config).__name__}"
            )
        self.config = config

    @property
    def name(self) -> str:
        return type(self).__name__

    def configuration_details(self) -> Dict[str, Any]:
        return self.config.snapshot()

    @abstractmethod
    def check(self, url: str, response: Response) -> List[Finding]:
        """Run the check. Returns an empty list when there is nothing to report."""

    def __repr__(self) -> str:
        return f"{self.name}({self.config!r})"


# ─── Shared Single-Element Evaluation ─────────────────────────────────


@dataclass(frozen=True)
class ElementRule:
    """What a single-element check selects and how it words its findings."""

    xpath: str
    extract: Callable[[HtmlElement], str]
    label: str                          # "title" -> "Error during title check: ..."
    subject: str                        # "Title" -> "Title length (9) ..."
    missing_message: str
    multiple_message: str
    empty_message: str
    success_message: str
    content_key: Optional[str] = None   # echo the content into length details


def _element_text(element: HtmlElement) -> str:
    return element.text_content() or ""


def _content_attribute(element: HtmlElement) -> str:
    return element.get("content") or ""


def _issue(
    issue_type: IssueType,
    message: str,
    config: ElementCheckConfig,
    check_name: str,
    url: str,
    configuration: Optional[Dict[str, Any]],
    details: Optional[Dict[str, Any]] = None,
) -> Finding:
    details = dict(details or {})
    details["issue_type"] = issue_type.value
    return Finding(
        level=config.level_for(issue_type),
        message=message,
        check_name=check_name,
        url=url,
        configuration=configuration,
        details=details,
    )


def evaluate_element(
    tree: HtmlElement,
    rule: ElementRule,
    config: ElementCheckConfig,
    check_name: str,
    url: str,
    configuration: Optional[Dict[str, Any]] = None,
) -> List[Finding]:
    """
    Evaluate the element selected by rule.xpath.

    A missing element ends the evaluation with a single finding. With several
    matches, one "multiple" finding is reported and the first match is
    evaluated. Blank content is reported as "empty" and skips the length
    bounds. Returns an empty list when nothing is wrong.
    """
    findings: List[Finding] = []

    nodes = tree.xpath(rule.xpath)
    count = len(nodes)

    if count == 0:
        return [_issue(IssueType.MISSING, rule.missing_message, config, check_name, url, configuration)]

    if count > 1:
        findings.append(
            _issue(
                IssueType.MULTIPLE,
                rule.multiple_message,
                config,
                check_name,
                url,
                configuration,
                {"count": count},
            )
        )

    content = rule.extract(nodes[0]).strip()
    if not content:
        findings.append(_issue(IssueType.EMPTY, rule.empty_message, config, check_name, url, configuration))
        return findings

    length = len(content)
    bounds = (
        ("min", config.min_length, lambda limit: length < limit, "is less than minimum"),
        ("max", config.max_length, lambda limit: length > limit, "exceeds maximum"),
    )
    for bound_type, limit, violated, wording in bounds:
        if not limit or not violated(limit):
            continue
        details: Dict[str, Any] = {}
        if rule.content_key:
            details[rule.content_key] = content
        details.update({"length": length, "limit": limit, "type": bound_type})
        findings.append(
            _issue(
                IssueType.LENGTH,
                f"{rule.subject} length ({length}) {wording} ({limit}).",
                config,
                check_name,
                url,
                configuration,
                details,
            )
        )

    return findings


def run_element_check(check: CheckInterface, rule: ElementRule, url: str, response: Response) -> List[Finding]:
    """Parse, evaluate and finalize one single-element check."""
    check_name = check.name
    configuration = check.configuration_details()

    tree = dom.try_parse(url, response, check_name)
    if tree is None:
        return [Finding.error(SKIPPED_MESSAGE, check_name, url, configuration)]

    try:
        findings = evaluate_element(tree, rule, check.config, check_name, url, configuration)
    except Exception as e:
        logger.warning(f"{check_name} failed on {url}: {e}", exc_info=True)
        return [Finding.error(f"Error during {rule.label} check: {e}", check_name, url, configuration)]

    return findings or [Finding.success(rule.success_message, check_name, url, configuration)]


# ─── Document Checks ──────────────────────────────────────────────────


class TitleCheck(CheckInterface):
    """Presence, uniqueness and length of <head><title>."""

    config_class = TitleCheckConfig
    rule = ElementRule(
        xpath="//head/title",
        extract=_element_text,
        label="title",
        subject="Title",
        missing_message="Missing <title> tag.",
        multiple_message="Multiple <title> tags found.",
        empty_message="<title> tag is empty or contains only whitespace.",
        success_message="Title is present and has appropriate length.",
    )

    def check(self, url: str, response: Response) -> List[Finding]:
        return run_element_check(self, self.rule, url, response)


class MetaDescriptionCheck(CheckInterface):
    """Presence, uniqueness and length of <meta name="description"> in <head>."""

    config_class = MetaDescriptionCheckConfig
    rule = ElementRule(
        xpath='//head/meta[@name="description"]',
        extract=_content_attribute,
        label="meta description",
        subject="Description",
        missing_message='Missing <meta name="description"> tag.',
        multiple_message='Multiple <meta name="description"> tags found.',
        empty_message='<meta name="description"> tag content is empty.',
        success_message="Description is present and has appropriate length.",
        content_key="description",
    )

    def check(self, url: str, response: Response) -> List[Finding]:
        return run_element_check(self, self.rule, url, response)


class H1Check(CheckInterface):
    """Presence, uniqueness and length of the page's <h1>."""

    config_class = H1CheckConfig
    rule = ElementRule(
        xpath="//h1",
        extract=_element_text,
        label="heading",
        subject="Heading",
        missing_message="Missing <h1> tag.",
        multiple_message="Multiple <h1> tags found.",
        empty_message="<h1> tag is empty or contains only whitespace.",
        success_message="Heading is present and has appropriate length.",
        content_key="heading",
    )

    def check(self, url: str, response: Response) -> List[Finding]:
        return run_element_check(self, self.rule, url, response)


class ImageAltTextCheck(CheckInterface):
    """
    Alt attributes of every <img>.

    Unlike the document checks this one stays silent when there is nothing
    to inspect: non-HTML responses and pages without images give [].
    """

    config_class = ImageAltTextCheckConfig

    def check(self, url: str, response: Response) -> List[Finding]:
        check_name = self.name
        configuration = self.configuration_details()

        tree = dom.try_parse(url, response, check_name)
        if tree is None:
            return []

        findings: List[Finding] = []
        try:
            images = tree.xpath("//img")
            if not images:
                return []

            for img in images:
                issue = self._image_issue(img)
                if issue is None:
                    continue
                issue_type, message, src = issue
                findings.append(
                    Finding(
                        level=self.config.level_for(issue_type),
                        message=message,
                        check_name=check_name,
                        url=url,
                        configuration=configuration,
                        details={"type": issue_type.value, "src": src},
                    )
                )
        except Exception as e:
            logger.warning(f"{check_name} failed on {url}: {e}", exc_info=True)
            return [Finding.error(f"Error processing images: {e}", check_name, url, configuration)]

        return findings or [
            Finding.success("All images have appropriate alt attributes.", check_name, url, configuration)
        ]

    def _image_issue(self, img: HtmlElement) -> Optional[Tuple[IssueType, str, str]]:
        """Return (issue_type, message, src) for a failing image, else None."""
        src = img.get("src")
        if src is None:
            src = MISSING_SRC_PLACEHOLDER

        if "alt" not in img.attrib:
            return IssueType.MISSING, "Missing alt attribute.", src

        if self.config.flag_empty_alt and not (img.get("alt") or "").strip():
            return IssueType.EMPTY, 'Alt attribute is empty (alt="").', src

        return None


# ─── Status Code ──────────────────────────────────────────────────────


class StatusCodeCheck(CheckInterface):
    """Classify the HTTP status code. Always returns exactly one finding."""

    config_class = StatusCodeCheckConfig

    def check(self, url: str, response: Response) -> List[Finding]:
        check_name = self.name
        configuration = self.configuration_details()
        status_code = response.status_code
        details: Dict[str, Any] = {"status_code": status_code}

        if response.successful:
            return [self._success(url, configuration, status_code)]

        if response.redirect:
            if self.config.redirect_level == FindingLevel.SUCCESS:
                return [self._success(url, configuration, status_code)]
            level = self.config.redirect_level
            message = f"Page redirected ({status_code})"
            details["redirect_location"] = response.header("Location")
        elif response.client_error:
            level = self.config.client_error_level
            message = f"Client error response ({status_code})"
        elif response.server_error:
            level = self.config.server_error_level
            message = f"Server error response ({status_code})"
        else:
            level = self.config.unexpected_level
            message = f"Received unexpected status code: {status_code}"

        return [
            Finding(
                level=level,
                message=message,
                check_name=check_name,
                url=url,
                configuration=configuration,
                details=details,
            )
        ]

    def _success(self, url: str, configuration: Dict[str, Any], status_code: int) -> Finding:
        return Finding.success(
            "Status code indicates success.",
            self.name,
            url,
            configuration,
            {"status_code": status_code},
        )
