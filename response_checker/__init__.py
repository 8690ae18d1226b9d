"""
response_checker — pluggable content checks for HTTP responses.

Each check inspects one (url, response) pair and reports a list of Finding
objects with a severity level. Non-HTML bodies, malformed markup and check
failures come back as findings, never as exceptions.

Usage:
    from response_checker import ResponseAnalyzer, Response

    analyzer = ResponseAnalyzer()

    # From an httpx response
    findings = analyzer.analyze_response(url, httpx_response)

    # From raw parts
    response = Response(200, {"Content-Type": "text/html"}, html)
    findings = analyzer.analyze_response(url, response)

    # A single check with custom settings
    findings = TitleCheck(max_length=70).check(url, response)
"""

from .analyzer import (
    CHECK_REGISTRY,
    ResponseAnalyzer,
    UnknownCheckError,
    build_checks,
    default_checks,
    validate_check_result,
)
from .checks import (
    CheckInterface,
    ElementRule,
    H1Check,
    ImageAltTextCheck,
    MetaDescriptionCheck,
    StatusCodeCheck,
    TitleCheck,
    evaluate_element,
)
from .dom import is_html_response, try_parse
from .exceptions import InvalidCheckResultError, ResponseCheckerError
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

__all__ = [
    # Main entry points
    "ResponseAnalyzer",
    "Response",
    "build_checks",
    "default_checks",
    "validate_check_result",
    "CHECK_REGISTRY",
    # Checks
    "CheckInterface",
    "TitleCheck",
    "MetaDescriptionCheck",
    "H1Check",
    "ImageAltTextCheck",
    "StatusCodeCheck",
    "ElementRule",
    "evaluate_element",
    # DOM access
    "is_html_response",
    "try_parse",
    # Models
    "Finding",
    "FindingLevel",
    "IssueType",
    "CheckConfig",
    "ElementCheckConfig",
    "TitleCheckConfig",
    "MetaDescriptionCheckConfig",
    "H1CheckConfig",
    "ImageAltTextCheckConfig",
    "StatusCodeCheckConfig",
    # Errors
    "ResponseCheckerError",
    "InvalidCheckResultError",
    "UnknownCheckError",
]
