from falconwatch.visibility.blockers import (
    DEFAULT_RULES,
    BlockerContext,
    BlockerRule,
    find_blocker,
)
from falconwatch.visibility.scoring import CloudAssessment

CLEAR = CloudAssessment(score=1.0, is_fatal=False, reason=None)
OVERCAST = CloudAssessment(
    score=0.0,
    is_fatal=True,
    reason="Overcast conditions with low cloud ceiling blocking view",
)


def _ctx(**kwargs) -> BlockerContext:
    values = dict(
        cloud=CLEAR,
        sun_score=1.0,
        distance_score=0.5,
        distance_km=400.0,
        max_visible_km=1000.0,
        lighting="twilight",
        site_name="Vandenberg SFB",
    )
    values.update(kwargs)
    return BlockerContext(**values)


def test_no_blocker():
    assert find_blocker(_ctx()) is None


def test_cloud_blocker():
    blocker = find_blocker(_ctx(cloud=OVERCAST))
    assert blocker.name == "cloud"
    assert blocker.message == OVERCAST.reason


def test_distance_blocker_message():
    blocker = find_blocker(
        _ctx(distance_score=0.0, distance_km=500.0, max_visible_km=200.0, lighting="day", sun_score=0.3)
    )
    assert blocker.name == "distance"
    assert blocker.message == (
        "Location is 311 miles from Vandenberg SFB, beyond the ~124-mile daytime visibility limit"
    )


def test_zero_distance_is_not_out_of_range():
    assert find_blocker(_ctx(distance_score=0.0, distance_km=0.0)) is None


def test_midday_sun_blocker():
    blocker = find_blocker(_ctx(sun_score=0.05))
    assert blocker.name == "sun"
    assert "Midday sun" in blocker.message


def test_cloud_takes_priority_over_distance_and_sun():
    ctx = _ctx(cloud=OVERCAST, distance_score=0.0, distance_km=5000.0, sun_score=0.05)
    assert find_blocker(ctx).name == "cloud"


def test_distance_takes_priority_over_sun():
    ctx = _ctx(distance_score=0.0, distance_km=5000.0, sun_score=0.05)
    assert find_blocker(ctx).name == "distance"


def test_custom_rules():
    smoke = BlockerRule("smoke", lambda ctx: True, lambda ctx: "Wildfire smoke")
    assert find_blocker(_ctx(), (smoke,)).message == "Wildfire smoke"
    assert find_blocker(_ctx(cloud=OVERCAST), ()) is None
    assert find_blocker(_ctx(), DEFAULT_RULES + (smoke,)).name == "smoke"
