from __future__ import annotations

import pytest
import yaml
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from cartridge_lint.checks.front_matter import REQUIRED_FIELDS, check_header_fields, validate_front_matter
from cartridge_lint.document import split_document
from cartridge_lint.model import FindingLog

from conftest import VALID_HEADER


def _messages(items) -> list[str]:
    return [item.message for item in items]


def _validate(header_text: str, registry):
    log = FindingLog()
    result = validate_front_matter(split_document(f"---\n{header_text}---\n\n## Purpose\n"), registry, log)
    return result, log


def test_valid_header_resolves_stack_without_findings(registry) -> None:
    log = FindingLog()
    assert check_header_fields(dict(VALID_HEADER), registry, log) == "next-baseline"
    assert log.items == []


def test_unknown_stack_bad_version_and_missing_owner(registry) -> None:
    header_text = (
        "cartridge: true\n"
        "name: Scenario A\n"
        "tier: prototype\n"
        "stack: not-registered\n"
        "version: 1.0\n"
        "status: stable\n"
    )
    result, log = _validate(header_text, registry)
    assert result.stack_name is None
    errors = _messages(log.errors)
    assert len(errors) == 3
    assert "Missing required front matter field: owner" in errors
    assert "Unknown stack: not-registered. Available stacks: fastapi-service, next-baseline" in errors
    assert "Invalid version format: 1.0. Use semver (e.g., 1.0.0)" in errors
    assert log.warnings == ()


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_each_missing_field_is_reported_once(registry, field: str) -> None:
    header = {k: v for k, v in VALID_HEADER.items() if k != field}
    log = FindingLog()
    check_header_fields(header, registry, log)
    assert _messages(log.errors) == [f"Missing required front matter field: {field}"]


@given(st.sets(st.sampled_from(REQUIRED_FIELDS)))
@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_missing_fields_never_mask_each_other(registry, missing: set[str]) -> None:
    header = {k: v for k, v in VALID_HEADER.items() if k not in missing}
    log = FindingLog()
    check_header_fields(header, registry, log)
    expected = sorted(f"Missing required front matter field: {field}" for field in missing)
    assert sorted(_messages(log.errors)) == expected


@pytest.mark.parametrize("value", ["yes please", "false", 1, "True"])
def test_cartridge_marker_must_be_literal_true(registry, value) -> None:
    log = FindingLog()
    check_header_fields({**VALID_HEADER, "cartridge": value}, registry, log)
    assert _messages(log.errors) == ["Front matter cartridge field must be true"]


def test_invalid_tier_and_status_name_the_allowed_values(registry) -> None:
    log = FindingLog()
    check_header_fields({**VALID_HEADER, "tier": "enterprise", "status": "beta"}, registry, log)
    assert _messages(log.errors) == [
        "Invalid tier: enterprise. Must be one of: prototype, productizing, production",
        "Invalid status: beta. Must be one of: draft, stable, deprecated",
    ]


@pytest.mark.parametrize("version", ["1.0.0", "10.20.30", "1.2.3-rc.1", "0.0.1+build"])
def test_semver_prefix_versions_pass(registry, version: str) -> None:
    log = FindingLog()
    check_header_fields({**VALID_HEADER, "version": version}, registry, log)
    assert log.items == []


@pytest.mark.parametrize("version", ["v1.0.0", "1.0", "latest", "1"])
def test_non_semver_versions_fail(registry, version: str) -> None:
    log = FindingLog()
    check_header_fields({**VALID_HEADER, "version": version}, registry, log)
    assert _messages(log.errors) == [f"Invalid version format: {version}. Use semver (e.g., 1.0.0)"]


def test_owner_without_sigil_is_only_a_warning(registry) -> None:
    log = FindingLog()
    check_header_fields({**VALID_HEADER, "owner": "platform-team"}, registry, log)
    assert log.errors == ()
    assert _messages(log.warnings) == ["Owner should start with @ (e.g., @username): platform-team"]


def test_missing_front_matter_stops_further_checks(registry) -> None:
    log = FindingLog()
    result = validate_front_matter(split_document("# Title\n\n## Purpose\n"), registry, log)
    assert not result.parsed
    assert _messages(log.errors) == ["Missing front matter"]


def test_invalid_yaml_reports_cause_and_skips_field_checks(registry) -> None:
    result, log = _validate("cartridge: true\nname: [broken\n", registry)
    assert not result.parsed
    assert len(log.errors) == 1
    assert log.errors[0].message.startswith("Invalid YAML in front matter:")


def test_non_mapping_front_matter_is_rejected(registry) -> None:
    _, log = _validate("- just\n- a list\n", registry)
    assert _messages(log.errors) == ["Front matter must be a mapping"]


def test_empty_front_matter_reports_every_field(registry) -> None:
    log = FindingLog()
    validate_front_matter(split_document("---\n---\n\nbody\n"), registry, log)
    assert len(log.errors) == len(REQUIRED_FIELDS)


def test_header_round_trips_through_yaml(registry) -> None:
    text = yaml.safe_dump(VALID_HEADER, sort_keys=False)
    result, log = _validate(text, registry)
    assert result.parsed
    assert result.stack_name == "next-baseline"
    assert log.items == []
