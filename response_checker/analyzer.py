"""
ResponseAnalyzer — runs a set of checks over one response.

This is the thin harness around CheckInterface: it adapts the response,
runs each check in order, and makes sure every check honours its contract
of returning Finding objects. Crawling, retries and persistence belong to
the caller.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Type

from .checks import (
    CheckInterface,
    H1Check,
    ImageAltTextCheck,
    MetaDescriptionCheck,
    StatusCodeCheck,
    TitleCheck,
)
from .exceptions import InvalidCheckResultError, ResponseCheckerError
from .models import Finding
from .response import Response

logger = logging.getLogger(__name__)


CHECK_REGISTRY: Dict[str, Type[CheckInterface]] = {
    cls.__name__: cls
    for cls in (StatusCodeCheck, TitleCheck, MetaDescriptionCheck, H1Check, ImageAltTextCheck)
}


class UnknownCheckError(ResponseCheckerError, KeyError):
    """A settings mapping named a check that is not registered."""


def default_checks() -> List[CheckInterface]:
    """One instance of every built-in check with default settings."""
    return [cls() for cls in CHECK_REGISTRY.values()]


def build_checks(
    settings: Mapping[str, Optional[Mapping[str, Any]]],
    registry: Optional[Mapping[str, Type[CheckInterface]]] = None,
) -> List[CheckInterface]:
    """
    Build configured checks from a plain mapping, e.g. decoded JSON:

        build_checks({
            "TitleCheck": {"max_length": 70},
            "ImageAltTextCheck": {"flag_empty_alt": False},
            "StatusCodeCheck": None,
        })

    Invalid settings raise pydantic's ValidationError.
    """
    registry = CHECK_REGISTRY if registry is None else registry
    checks: List[CheckInterface] = []
    for name, check_settings in settings.items():
        if name not in registry:
            raise UnknownCheckError(f"Unknown check '{name}'. Known checks: {', '.join(registry)}")
        checks.append(registry[name](**dict(check_settings or {})))
    return checks


def validate_check_result(check: CheckInterface, result: Any) -> List[Finding]:
    """Return the result as a list, or raise if it is not an iterable of Finding."""
    check_name = getattr(check, "name", type(check).__name__)

    if isinstance(result, (str, bytes, Mapping)) or not isinstance(result, Iterable):
        raise InvalidCheckResultError(check_name, result)

    findings = list(result)
    for item in findings:
        if not isinstance(item, Finding):
            raise InvalidCheckResultError(check_name, item)
    return findings


class ResponseAnalyzer:
    """
    Runs checks against a single response.

    Usage:
        analyzer = ResponseAnalyzer()
        findings = analyzer.analyze_response(url, httpx_response)

        analyzer = ResponseAnalyzer(build_checks({"TitleCheck": {"max_length": 70}}))
    """

    def __init__(self, checks: Optional[Sequence[CheckInterface]] = None):
        self.checks: List[CheckInterface] = list(checks) if checks is not None else default_checks()

    def analyze_response(self, url: str, response: Any) -> List[Finding]:
        """
        Run every check and return all findings in check order.

        Args:
            url: The page URL.
            response: A Response or an httpx.Response with its body read.

        Raises:
            InvalidCheckResultError: when a check breaks its return contract.
        """
        response = Response.coerce(response)
        findings: List[Finding] = []
        for check in self.checks:
            result = check.check(url, response)
            findings.extend(validate_check_result(check, result))
        logger.debug(f"{len(findings)} findings from {len(self.checks)} checks for {url}")
        return findings
