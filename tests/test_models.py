"""Tests for Finding, FindingLevel and the check settings models."""

import logging

import pytest
from pydantic import ValidationError

from response_checker import (
    Finding,
    FindingLevel,
    ImageAltTextCheckConfig,
    IssueType,
    MetaDescriptionCheckConfig,
    TitleCheck,
    TitleCheckConfig,
)

URL = "http://example.com/"


class TestFinding:

    @pytest.mark.parametrize(
        "factory,level",
        [
            (Finding.success, FindingLevel.SUCCESS),
            (Finding.info, FindingLevel.INFO),
            (Finding.warning, FindingLevel.WARNING),
            (Finding.error, FindingLevel.ERROR),
        ],
    )
    def test_named_constructors(self, factory, level):
        finding = factory("msg", "SomeCheck", URL, {"a": 1}, {"b": 2})

        assert finding == Finding(
            level=level,
            message="msg",
            check_name="SomeCheck",
            url=URL,
            configuration={"a": 1},
            details={"b": 2},
        )

    def test_optional_fields_default_to_none(self):
        finding = Finding.info("msg", "SomeCheck", URL)

        assert finding.configuration is None
        assert finding.details is None

    def test_is_immutable(self):
        finding = Finding.error("msg", "SomeCheck", URL)

        with pytest.raises(ValidationError):
            finding.message = "changed"

    def test_mappings_cannot_be_changed_in_place(self):
        finding = Finding.warning(
            "msg", "SomeCheck", URL, {"max_length": 60}, {"issue_type": "length", "extra": {"n": 1}}
        )

        with pytest.raises(TypeError):
            finding.details["issue_type"] = "tampered"
        with pytest.raises(TypeError):
            finding.configuration["max_length"] = 1
        with pytest.raises(TypeError):
            finding.details["extra"]["n"] = 2

        assert finding.details == {"issue_type": "length", "extra": {"n": 1}}
        assert finding.configuration == {"max_length": 60}

    def test_source_dicts_are_copied(self):
        details = {"issue_type": "missing"}
        finding = Finding.error("msg", "SomeCheck", URL, details=details)

        details["issue_type"] = "tampered"

        assert finding.details == {"issue_type": "missing"}

    def test_is_hashable(self):
        first = Finding.error("msg", "SomeCheck", URL, {"a": 1}, {"items": [1, 2]})
        second = Finding.error("msg", "SomeCheck", URL, {"a": 1}, {"items": [1, 2]})

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_dump_returns_plain_dicts(self):
        finding = Finding.info("msg", "SomeCheck", URL, {"a": 1}, {"items": [1, 2], "nested": {"b": 2}})

        dumped = finding.model_dump()

        assert type(dumped["configuration"]) is dict
        assert dumped["details"] == {"items": [1, 2], "nested": {"b": 2}}
        assert type(dumped["details"]["nested"]) is dict
        assert Finding(**dumped) == finding

    def test_copy_with_changes_leaves_original_alone(self):
        finding = Finding.error("msg", "SomeCheck", URL)
        changed = finding.model_copy(update={"level": FindingLevel.INFO})

        assert finding.level == FindingLevel.ERROR
        assert changed.level == FindingLevel.INFO

    def test_level_accepts_string_value(self):
        finding = Finding(level="warning", message="m", check_name="c", url=URL)

        assert finding.level is FindingLevel.WARNING


class TestCheckConfig:

    def test_defaults(self):
        assert TitleCheckConfig().min_length == 10
        assert TitleCheckConfig().max_length == 60
        assert MetaDescriptionCheckConfig().min_length == 50
        assert MetaDescriptionCheckConfig().max_length == 160

    def test_snapshot_omits_none(self):
        snapshot = TitleCheckConfig(max_length=None).snapshot()

        assert "max_length" not in snapshot
        assert snapshot["min_length"] == 10

    def test_is_frozen(self):
        config = TitleCheckConfig()

        with pytest.raises(ValidationError):
            config.min_length = 5

    @pytest.mark.parametrize(
        "issue_type,level",
        [
            (IssueType.MISSING, FindingLevel.ERROR),
            (IssueType.EMPTY, FindingLevel.ERROR),
            (IssueType.LENGTH, FindingLevel.WARNING),
            (IssueType.MULTIPLE, FindingLevel.WARNING),
            ("length", FindingLevel.WARNING),
        ],
    )
    def test_level_for(self, issue_type, level):
        assert TitleCheckConfig().level_for(issue_type) == level

    def test_unknown_issue_type_defaults_to_warning(self, caplog):
        config = TitleCheckConfig(missing_level="info")

        with caplog.at_level(logging.WARNING, logger="response_checker.models"):
            level = config.level_for("duplicate")

        assert level == FindingLevel.WARNING
        assert "Unknown issue type 'duplicate'" in caplog.text

    def test_image_config_level_for(self):
        config = ImageAltTextCheckConfig(empty_alt_level="info")

        assert config.level_for(IssueType.MISSING) == FindingLevel.WARNING
        assert config.level_for(IssueType.EMPTY) == FindingLevel.INFO
        assert config.level_for(IssueType.LENGTH) == FindingLevel.WARNING


class TestCheckConstruction:

    def test_config_object(self):
        check = TitleCheck(config=TitleCheckConfig(max_length=70))

        assert check.config.max_length == 70

    def test_config_and_settings_together_rejected(self):
        with pytest.raises(TypeError):
            TitleCheck(config=TitleCheckConfig(), max_length=70)

    def test_wrong_config_type_rejected(self):
        with pytest.raises(TypeError):
            TitleCheck(config=ImageAltTextCheckConfig())
