"""Tests for wire message decoding."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pingboard.protocol.messages import (
    MAX_TIMESTAMP_MS,
    PingResult,
    decode_ping_result,
    decode_traceroute_result,
)
from pingboard.telemetry.models import Hop, PingOutcome


class TestPingResult:
    """Tests for pingResult payloads."""

    def test_decode(self):
        """Test a well-formed payload decodes to a sample."""
        message = decode_ping_result(
            {"ip": "8.8.8.8", "latency": 12.5, "status": "success", "timestamp": 1000}
        )
        sample = message.to_sample()

        assert sample.address == "8.8.8.8"
        assert sample.latency_ms == 12.5
        assert sample.outcome is PingOutcome.SUCCESS
        assert sample.observed_at == datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC)

    def test_address_comes_from_stripped_ip(self):
        """Test the sample and snapshot addresses are the trimmed ip field."""
        sample = decode_ping_result(
            {"ip": " 8.8.8.8 ", "latency": 1, "status": "success", "timestamp": 1}
        ).to_sample()
        snapshot = decode_traceroute_result({"ip": "1.1.1.1\n", "hops": []}).to_snapshot()

        assert sample.address == "8.8.8.8"
        assert snapshot.address == "1.1.1.1"

    def test_failed_status(self):
        """Test failed probes keep their outcome."""
        message = decode_ping_result(
            {"ip": "8.8.8.8", "latency": 0, "status": "failed", "timestamp": 5}
        )
        assert message.to_sample().outcome is PingOutcome.FAILED

    def test_millisecond_precision(self):
        """Test epoch milliseconds keep sub-second precision."""
        sample = PingResult(ip="a", latency=1, status="success", timestamp=1500).to_sample()
        assert sample.observed_at.microsecond == 500_000

    def test_unknown_status_rejected(self):
        """Test an unknown status is a validation error."""
        with pytest.raises(ValidationError):
            decode_ping_result({"ip": "a", "latency": 1, "status": "timeout", "timestamp": 1})

    def test_missing_field_rejected(self):
        """Test a missing field is a validation error."""
        with pytest.raises(ValidationError):
            decode_ping_result({"ip": "a", "status": "success", "timestamp": 1})

    @pytest.mark.parametrize("timestamp", [float("nan"), float("inf"), -1, MAX_TIMESTAMP_MS + 1])
    def test_out_of_range_timestamp_rejected(self, timestamp):
        """Test timestamps a datetime cannot hold are validation errors."""
        with pytest.raises(ValidationError):
            decode_ping_result({"ip": "a", "latency": 1, "status": "success", "timestamp": timestamp})

    def test_latest_representable_timestamp(self):
        """Test the upper timestamp bound still converts."""
        sample = decode_ping_result(
            {"ip": "a", "latency": 1, "status": "success", "timestamp": MAX_TIMESTAMP_MS}
        ).to_sample()
        assert sample.observed_at.year == 9999

    def test_extra_fields_ignored(self):
        """Test unknown fields do not break decoding."""
        message = decode_ping_result(
            {"ip": "a", "latency": 1, "status": "success", "timestamp": 1, "ttl": 57}
        )
        assert message.ip == "a"


class TestTracerouteResult:
    """Tests for tracerouteResult payloads."""

    def test_decode(self):
        """Test hops are converted in order."""
        message = decode_traceroute_result(
            {
                "ip": "1.1.1.1",
                "hops": [
                    {"hop": 1, "address": "10.0.0.1", "latency": 2},
                    {"hop": 2, "address": "1.1.1.1", "latency": 8},
                ],
            }
        )
        snapshot = message.to_snapshot()

        assert snapshot.address == "1.1.1.1"
        assert snapshot.hops == (Hop(1, "10.0.0.1", 2.0), Hop(2, "1.1.1.1", 8.0))

    def test_empty_hops(self):
        """Test a traceroute without hops is valid."""
        assert decode_traceroute_result({"ip": "1.1.1.1", "hops": []}).to_snapshot().hops == ()

    def test_hop_index_must_be_positive(self):
        """Test hop numbers start at 1."""
        with pytest.raises(ValidationError):
            decode_traceroute_result(
                {"ip": "1.1.1.1", "hops": [{"hop": 0, "address": "x", "latency": 1}]}
            )

    def test_not_a_mapping(self):
        """Test a non-object payload is a validation error."""
        with pytest.raises(ValidationError):
            decode_traceroute_result("1.1.1.1")
