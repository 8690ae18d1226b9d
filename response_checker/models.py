"""
Response checker data models.

Findings are the only output type of every check. Check settings live in
frozen pydantic models so a check's configuration cannot drift while it runs.
"""

import logging
from collections.abc import Mapping as MappingABC
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

logger = logging.getLogger(__name__)


class FindingLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class IssueType(str, Enum):
    MISSING = "missing"
    EMPTY = "empty"
    LENGTH = "length"
    MULTIPLE = "multiple"


# ─── Findings ─────────────────────────────────────────────────────────


def _freeze(value: Any) -> Any:
    """Copy nested dicts and lists into read-only mappings and tuples."""
    if isinstance(value, MappingABC):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, MappingABC):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


def _hash_key(value: Any) -> Any:
    if isinstance(value, MappingABC):
        return frozenset((k, _hash_key(v)) for k, v in value.items())
    if isinstance(value, tuple):
        return tuple(_hash_key(v) for v in value)
    return value


class Finding(BaseModel):
    """
    One observation reported by a check for a single URL.

    ``configuration`` and ``details`` are stored as read-only mappings, so a
    finding cannot be changed in place once built. ``model_dump`` turns them
    back into plain dicts.
    """

    model_config = ConfigDict(frozen=True)

    level: FindingLevel
    message: str
    check_name: str
    url: str
    configuration: Optional[Mapping[str, Any]] = None
    details: Optional[Mapping[str, Any]] = None

    @field_validator("configuration", "details")
    @classmethod
    def freeze_mappings(cls, value: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
        return None if value is None else _freeze(value)

    @field_serializer("configuration", "details")
    def dump_mappings(self, value: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        return None if value is None else _thaw(value)

    def __hash__(self) -> int:
        return hash((
            self.level,
            self.message,
            self.check_name,
            self.url,
            _hash_key(self.configuration),
            _hash_key(self.details),
        ))

    @classmethod
    def success(
        cls,
        message: str,
        check_name: str,
        url: str,
        configuration: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "Finding":
        return cls(
            level=FindingLevel.SUCCESS,
            message=message,
            check_name=check_name,
            url=url,
            configuration=configuration,
            details=details,
        )

    @classmethod
    def info(
        cls,
        message: str,
        check_name: str,
        url: str,
        configuration: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "Finding":
        return cls(
            level=FindingLevel.INFO,
            message=message,
            check_name=check_name,
            url=url,
            configuration=configuration,
            details=details,
        )

    @classmethod
    def warning(
        cls,
        message: str,
        check_name: str,
        url: str,
        configuration: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "Finding":
        return cls(
            level=FindingLevel.WARNING,
            message=message,
            check_name=check_name,
            url=url,
            configuration=configuration,
            details=details,
        )

    @classmethod
    def error(
        cls,
        message: str,
        check_name: str,
        url: str,
        configuration: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "Finding":
        return cls(
            level=FindingLevel.ERROR,
            message=message,
            check_name=check_name,
            url=url,
            configuration=configuration,
            details=details,
        )


# ─── Check Settings ───────────────────────────────────────────────────


class CheckConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def snapshot(self) -> Dict[str, Any]:
        """Settings as a plain dict, leaving out anything set to None."""
        return self.model_dump(exclude_none=True)


def _unknown_issue_type(owner: str, issue_type: Union[IssueType, str]) -> FindingLevel:
    logger.warning(
        f"Unknown issue type '{issue_type}' encountered in {owner}. "
        "Defaulting level to WARNING."
    )
    return FindingLevel.WARNING


class ElementCheckConfig(CheckConfig):
    """
    Settings shared by the single-element checks (title, description, h1).

    A length bound of None or 0 is not enforced.
    """

    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    missing_level: FindingLevel = FindingLevel.ERROR
    empty_level: FindingLevel = FindingLevel.ERROR
    length_level: FindingLevel = FindingLevel.WARNING
    multiple_level: FindingLevel = FindingLevel.WARNING

    def level_for(self, issue_type: Union[IssueType, str]) -> FindingLevel:
        if issue_type == IssueType.MISSING:
            return self.missing_level
        if issue_type == IssueType.EMPTY:
            return self.empty_level
        if issue_type == IssueType.LENGTH:
            return self.length_level
        if issue_type == IssueType.MULTIPLE:
            return self.multiple_level
        return _unknown_issue_type(type(self).__name__, issue_type)


class TitleCheckConfig(ElementCheckConfig):
    min_length: Optional[int] = Field(default=10, ge=0)
    max_length: Optional[int] = Field(default=60, ge=0)


class MetaDescriptionCheckConfig(ElementCheckConfig):
    min_length: Optional[int] = Field(default=50, ge=0)
    max_length: Optional[int] = Field(default=160, ge=0)


class H1CheckConfig(ElementCheckConfig):
    min_length: Optional[int] = Field(default=20, ge=0)
    max_length: Optional[int] = Field(default=70, ge=0)


class ImageAltTextCheckConfig(CheckConfig):
    flag_empty_alt: bool = True
    missing_alt_level: FindingLevel = FindingLevel.WARNING
    empty_alt_level: FindingLevel = FindingLevel.WARNING

    def level_for(self, issue_type: Union[IssueType, str]) -> FindingLevel:
        if issue_type == IssueType.MISSING:
            return self.missing_alt_level
        if issue_type == IssueType.EMPTY:
            return self.empty_alt_level
        return _unknown_issue_type(type(self).__name__, issue_type)


class StatusCodeCheckConfig(CheckConfig):
    redirect_level: FindingLevel = FindingLevel.WARNING
    client_error_level: FindingLevel = FindingLevel.ERROR
    server_error_level: FindingLevel = FindingLevel.ERROR
    unexpected_level: FindingLevel = FindingLevel.ERROR
