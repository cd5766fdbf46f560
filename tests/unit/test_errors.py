from cwlogship.core.errors import (
    AlreadyExistsError,
    ErrorCategory,
    LogShipError,
    ProvisioningError,
    ResourceExhaustedError,
    SendError,
    SequenceTokenConflictError,
)
from cwlogship.core.events import LogEvent


class TestErrorTypes:
    def test_categories(self) -> None:
        assert ProvisioningError("create_log_group", "/g").category is (
            ErrorCategory.PROVISIONING
        )
        assert SendError("/g", "s", []).category is ErrorCategory.DELIVERY
        assert ResourceExhaustedError("full").category is ErrorCategory.RESOURCE
        assert AlreadyExistsError("log group", "/g").category is ErrorCategory.REMOTE

    def test_category_override(self) -> None:
        err = LogShipError("bad", category=ErrorCategory.CONFIG)
        assert err.category is ErrorCategory.CONFIG

    def test_cause_is_chained(self) -> None:
        original = ValueError("original")
        err = ProvisioningError("create_log_stream", "/g", cause=original)

        assert err.__cause__ is original
        assert err.cause is original
        assert err.to_dict()["cause"] == "ValueError: original"
        assert err.to_dict()["step"] == "create_log_stream"

    def test_send_error_exposes_dropped_batch(self) -> None:
        events = [LogEvent("a", 1), LogEvent("b", 2)]
        err = SendError("/g", "s", events, sequence_conflict=True)

        assert err.dropped_events == tuple(events)
        assert err.dropped_count == 2
        assert "sequence token conflict" in str(err)
        data = err.to_dict()
        assert data["dropped"] == 2
        assert data["sequence_conflict"] is True

    def test_sequence_conflict_keeps_expected_token(self) -> None:
        err = SequenceTokenConflictError("stale", expected_sequence_token="t-3")
        assert err.expected_sequence_token == "t-3"
        assert isinstance(err, LogShipError)


class TestLogEvent:
    def test_size_and_shape(self) -> None:
        event = LogEvent(message="ü", timestamp=1_700_000_000_000)

        assert event.size == 2 + 26
        assert event.to_dict() == {"timestamp": 1_700_000_000_000, "message": "ü"}
