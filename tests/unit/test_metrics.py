from __future__ import annotations

import pytest

from cwlogship.metrics.metrics import MetricsCollector


@pytest.mark.asyncio
async def test_disabled_metrics_noop_and_state() -> None:
    mc = MetricsCollector(enabled=False)
    await mc.record_line_accepted()
    await mc.record_flush(batch_size=5, latency_seconds=0.01)
    await mc.record_events_dropped(2)
    await mc.record_send_error()
    await mc.record_provisioning_error()

    snap = await mc.snapshot()
    assert mc.registry is None
    assert snap.lines_accepted == 1
    assert snap.flushes == 1
    assert snap.events_sent == 5
    assert snap.events_dropped == 2
    assert snap.send_errors == 1
    assert snap.provisioning_errors == 1


@pytest.mark.asyncio
async def test_enabled_counters_and_histograms() -> None:
    mc = MetricsCollector(enabled=True)
    await mc.record_line_accepted()
    await mc.record_line_accepted()
    await mc.record_flush(batch_size=7, latency_seconds=0.004)
    await mc.record_events_dropped(3)
    await mc.record_send_error()
    await mc.record_provisioning_error()

    reg = mc.registry
    assert reg is not None
    assert reg.get_sample_value("cwlogship_lines_accepted_total") == 2.0
    assert reg.get_sample_value("cwlogship_events_sent_total") == 7.0
    assert reg.get_sample_value("cwlogship_events_dropped_total") == 3.0
    assert reg.get_sample_value("cwlogship_errors_total", {"stage": "send"}) == 1.0
    assert (
        reg.get_sample_value("cwlogship_errors_total", {"stage": "provisioning"})
        == 1.0
    )
    assert reg.get_sample_value("cwlogship_batch_size_count") == 1.0
    assert reg.get_sample_value("cwlogship_flush_seconds_count") == 1.0


@pytest.mark.asyncio
async def test_snapshot_is_a_copy() -> None:
    mc = MetricsCollector()
    snap = await mc.snapshot()
    await mc.record_line_accepted()
    assert snap.lines_accepted == 0
