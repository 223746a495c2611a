import threading
from typing import Optional

import pytest

from alert_throttle import AlertThrottle
from pose_types import PostureAnalysis, PostureMode, PostureStatus, Urgency

from _helpers import FakeClock


def _analysis(status: PostureStatus, score: Optional[int] = None) -> PostureAnalysis:
    scores = {PostureStatus.GOOD: 90, PostureStatus.FAIR: 60, PostureStatus.POOR: 30}
    messages = {
        PostureStatus.GOOD: "Excellent posture!",
        PostureStatus.FAIR: "Sit up straighter",
        PostureStatus.POOR: "Slouching detected!",
    }
    return PostureAnalysis(
        score=scores[status] if score is None else score,
        status=status,
        message=messages[status],
        posture_mode=PostureMode.STANDING,
    )


POOR = _analysis(PostureStatus.POOR)
FAIR = _analysis(PostureStatus.FAIR)
GOOD = _analysis(PostureStatus.GOOD)


@pytest.fixture
def clock():
    return FakeClock(1000.0)


@pytest.fixture
def throttle(clock):
    return AlertThrottle(clock=clock)


def test_initial_state(throttle):
    assert throttle.last_status is None
    assert not throttle.in_cooldown


def test_first_poor_frame_alerts_immediately(throttle):
    alert = throttle.update(POOR)
    assert alert is not None
    assert alert.title == "Desk Sentry Alert"
    assert alert.body == "Slouching detected! (Score: 30)"
    assert alert.urgency == Urgency.NORMAL
    assert throttle.in_cooldown


def test_first_poor_frame_alerts_with_clock_starting_at_zero():
    assert AlertThrottle(clock=FakeClock(0.0)).update(POOR) is not None


def test_good_and_fair_never_alert(throttle, clock):
    for _ in range(10):
        assert throttle.update(GOOD) is None
        assert throttle.update(FAIR) is None
        clock.advance(30)


def test_second_poor_frame_inside_cooldown_is_suppressed(throttle, clock):
    assert throttle.update(POOR) is not None
    clock.advance(10)
    assert throttle.update(POOR) is None


def test_sustained_poor_under_a_minute_alerts_once(throttle, clock):
    alerts = []
    for _ in range(60):
        alerts.append(throttle.update(POOR))
        clock.advance(59 / 60)
    assert sum(a is not None for a in alerts) == 1


def test_sustained_poor_alerts_once_per_cooldown(throttle, clock):
    fired_at = []
    for second in range(181):
        if throttle.update(POOR) is not None:
            fired_at.append(second)
        clock.advance(1)
    assert fired_at == [0, 60, 120, 180]


def test_recovery_rearms_immediately(throttle, clock):
    assert throttle.update(POOR) is not None
    clock.advance(1)
    assert throttle.update(GOOD) is None
    assert not throttle.in_cooldown
    clock.advance(4)
    assert throttle.update(POOR) is not None


def test_fair_counts_as_recovery(throttle, clock):
    assert throttle.update(POOR) is not None
    throttle.update(FAIR)
    clock.advance(1)
    assert throttle.update(POOR) is not None


def test_every_recovery_rearms(throttle, clock):
    assert throttle.update(POOR) is not None
    throttle.update(GOOD)
    clock.advance(1)
    assert throttle.update(POOR) is not None
    throttle.update(FAIR)
    clock.advance(1)
    throttle.update(GOOD)
    assert throttle.update(POOR) is not None


def test_missing_analysis_freezes_state(throttle, clock):
    assert throttle.update(POOR) is not None
    stamp = throttle.last_alert_timestamp
    for _ in range(20):
        clock.advance(1)
        assert throttle.update(None) is None
    assert throttle.last_status == PostureStatus.POOR
    assert throttle.last_alert_timestamp == stamp
    # Still inside the window that started before the gap.
    assert throttle.update(POOR) is None
    # A recovery after the gap is still seen as an improvement edge.
    clock.advance(1)
    throttle.update(GOOD)
    assert throttle.update(POOR) is not None


def test_last_status_tracks_every_analysed_frame(throttle):
    throttle.update(FAIR)
    assert throttle.last_status == PostureStatus.FAIR
    throttle.update(GOOD)
    assert throttle.last_status == PostureStatus.GOOD


def test_custom_cooldown_title_and_urgency(clock):
    throttle = AlertThrottle(cooldown_seconds=5, clock=clock, title="Posture", urgency=Urgency.CRITICAL)
    alert = throttle.update(POOR)
    assert alert.title == "Posture"
    assert alert.urgency == Urgency.CRITICAL
    clock.advance(5)
    assert throttle.update(POOR) is not None


def test_reset(throttle):
    throttle.update(POOR)
    throttle.reset()
    assert throttle.last_status is None
    assert not throttle.in_cooldown
    assert throttle.update(POOR) is not None


def test_concurrent_updates_fire_once(throttle):
    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(throttle.update(POOR))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sum(r is not None for r in results) == 1
