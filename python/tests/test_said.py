"""Tests for local SAID derivation and the CESR helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from vlei_credentials.said import (
    Blake3Saider,
    DigestService,
    compute_said,
    format_timestamp,
    generate_nonce,
    verify_said,
)
from vlei_credentials.types import SAIDComputationError


def _block():
    return {"d": "", "i": "EAbc123", "dt": "2024-01-01T00:00:00.000000+00:00"}


class TestBlake3Saider:
    """Blake3Saider computes keripy-compatible SAIDs for plain dicts."""

    def test_said_is_44_char_blake3_qb64(self):
        _, completed = Blake3Saider().saidify(_block())
        said = completed["d"]
        assert len(said) == 44
        assert said.startswith("E")

    def test_returns_field_order(self):
        fields, _ = Blake3Saider().saidify(_block())
        assert fields == ["d", "i", "dt"]

    def test_deterministic(self):
        saider = Blake3Saider()
        assert saider.saidify(_block())[1]["d"] == saider.saidify(_block())[1]["d"]

    def test_input_not_mutated(self):
        block = _block()
        Blake3Saider().saidify(block)
        assert block["d"] == ""

    def test_placeholder_value_is_ignored(self):
        with_said = dict(_block(), d="Ealready-filled")
        assert compute_said(with_said) == compute_said(_block())

    def test_key_order_changes_said(self):
        reordered = {"d": "", "dt": "2024-01-01T00:00:00.000000+00:00", "i": "EAbc123"}
        assert compute_said(reordered) != compute_said(_block())

    def test_value_change_changes_said(self):
        changed = dict(_block(), i="EAbc124")
        assert compute_said(changed) != compute_said(_block())

    def test_custom_label(self):
        _, completed = Blake3Saider().saidify({"$id": "", "title": "x"}, label="$id")
        assert len(completed["$id"]) == 44

    def test_missing_label_raises(self):
        with pytest.raises(SAIDComputationError, match="missing digest field"):
            Blake3Saider().saidify({"i": "EAbc123"})

    def test_unserializable_value_raises(self):
        with pytest.raises(SAIDComputationError):
            Blake3Saider().saidify({"d": "", "i": object()})

    def test_lone_surrogate_raises(self):
        with pytest.raises(SAIDComputationError):
            Blake3Saider().saidify({"d": "", "LEI": "\ud800"})

    def test_non_ascii_text_is_hashed_as_utf8(self):
        _, completed = Blake3Saider().saidify({"d": "", "personLegalName": "Zoë Ångström"})
        assert verify_said(completed) is True

    def test_satisfies_protocol(self):
        assert isinstance(Blake3Saider(), DigestService)


class TestVerifySaid:
    def test_completed_block_verifies(self):
        _, completed = Blake3Saider().saidify(_block())
        assert verify_said(completed) is True

    def test_tampered_block_fails(self):
        _, completed = Blake3Saider().saidify(_block())
        completed["i"] = "Emallory"
        assert verify_said(completed) is False

    def test_empty_said_fails(self):
        assert verify_said(_block()) is False

    def test_uses_given_service(self, recording_service):
        _, completed = recording_service.saidify(_block())
        assert verify_said(completed, digest_service=recording_service) is True
        assert len(recording_service.calls) == 2


class TestGenerateNonce:
    def test_salt_qb64_shape(self):
        nonce = generate_nonce()
        assert len(nonce) == 24
        assert nonce.startswith("0A")

    def test_unique(self):
        assert len({generate_nonce() for _ in range(50)}) == 50


class TestFormatTimestamp:
    def test_utc_datetime(self):
        dt = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert format_timestamp(dt) == "2024-01-01T00:00:00.000000+00:00"

    def test_naive_datetime_is_treated_as_utc(self):
        assert format_timestamp(datetime(2024, 1, 1, 12, 30)) == (
            "2024-01-01T12:30:00.000000+00:00"
        )

    def test_offset_is_normalized_to_utc(self):
        dt = datetime(2024, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(dt) == "2024-01-01T00:00:00.000000+00:00"

    def test_defaults_to_now(self):
        assert format_timestamp().endswith("+00:00")
