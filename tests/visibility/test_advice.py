import datetime

import pytest

from falconwatch.visibility.advice import (
    BLOCKED_FOLLOW_UP,
    limiting_factors,
    recommendations,
    site_direction_text,
    trust_note,
    viewing_window,
)
from falconwatch.visibility.calibration import DEFAULT_CALIBRATION, DEFAULT_WEIGHTS
from falconwatch.visibility.scoring import CloudAssessment
from falconwatch.visibility.sites import BOCA_CHICA, CAPE_CANAVERAL, VANDENBERG
from falconwatch.visibility.types import SubScores

GOOD = SubScores(
    cloud=1.0,
    sun=1.0,
    distance=0.8,
    bearing=1.0,
    clarity=1.0,
    plume=0.6,
    brightness=0.85,
    obstruction=0.9,
)
CLEAR = CloudAssessment(score=1.0, is_fatal=False, reason=None)


def _factors(sub_scores, cloud=CLEAR, **kwargs):
    values = dict(
        sub_scores=sub_scores,
        weights=DEFAULT_WEIGHTS,
        cloud=cloud,
        cloud_cover_pct=0.0,
        solar_elevation=-8.0,
        distance_km=300.0,
        surface_visibility_km=40.0,
        site=VANDENBERG,
    )
    values.update(kwargs)
    return limiting_factors(**values)


def _recs(**kwargs):
    values = dict(
        lighting="twilight",
        solar_elevation=-8.0,
        sub_scores=GOOD,
        distance_km=450.0,
        aqi=None,
        site=VANDENBERG,
        mission_name="SDA Tranche 1",
        rocket_type="falcon9",
        blocker=None,
    )
    values.update(kwargs)
    return recommendations(**values)


def test_no_limiting_factors_when_all_good():
    assert _factors(GOOD) == []


def test_worst_two_factors():
    scores = SubScores(
        cloud=1.0,
        sun=0.15,
        distance=0.1,
        bearing=1.0,
        clarity=0.4,
        plume=0.9,
        brightness=0.85,
        obstruction=0.9,
    )
    factors = _factors(scores, solar_elevation=25.0, distance_km=900.0)
    assert [f.factor for f in factors] == ["distance", "sun"]
    assert factors[0].severity == "major"
    assert factors[0].description == "Distance of 559 miles from Vandenberg SFB"
    assert "(day)" in factors[1].description


def test_minor_severity():
    scores = SubScores(
        cloud=1.0,
        sun=1.0,
        distance=0.8,
        bearing=1.0,
        clarity=0.4,
        plume=0.6,
        brightness=0.85,
        obstruction=0.9,
    )
    factors = _factors(scores, surface_visibility_km=19.0)
    assert len(factors) == 1
    assert factors[0].factor == "clarity"
    assert factors[0].severity == "minor"
    assert factors[0].description == "Atmospheric clarity is limited (12 miles visibility)"


def test_cloud_reason_is_listed_first():
    cloud = CloudAssessment(score=0.06, is_fatal=False, reason="Low cloud cover significantly reducing visibility")
    scores = SubScores(
        cloud=0.06,
        sun=1.0,
        distance=0.8,
        bearing=1.0,
        clarity=1.0,
        plume=0.6,
        brightness=0.85,
        obstruction=0.9,
    )
    factors = _factors(scores, cloud=cloud, cloud_cover_pct=70.0)
    assert factors[0].description == cloud.reason
    assert factors[0].severity == "major"
    assert factors[1].description == "Cloud cover at 70% is reducing visibility"


def test_viewing_window_falcon9(launch_time):
    window = viewing_window(launch_time, -8.0, 1.0, DEFAULT_CALIBRATION.timing_for("falcon9"), VANDENBERG.timezone)
    assert window.start_formatted == "5:01 PM"
    assert window.end_formatted == "5:07 PM"
    assert window.duration_min == 6
    assert window.start_utc == datetime.datetime(2024, 7, 2, 0, 1, tzinfo=datetime.timezone.utc)
    assert window.description.startswith("Optimal twilight viewing 5:01 PM - 5:07 PM.")


def test_viewing_window_starship(launch_time):
    window = viewing_window(launch_time, -8.0, 1.0, DEFAULT_CALIBRATION.timing_for("starship"), VANDENBERG.timezone)
    assert window.end_formatted == "5:09 PM"
    assert window.duration_min == 8


def test_viewing_window_small_rocket_starts_later(launch_time):
    window = viewing_window(launch_time, -30.0, 0.65, DEFAULT_CALIBRATION.timing_for("smallRocket"), VANDENBERG.timezone)
    assert window.start_formatted == "5:02 PM"
    assert window.end_formatted == "5:06 PM"
    assert window.description.startswith("Night launch visible")


def test_viewing_window_uses_site_timezone(launch_time):
    window = viewing_window(launch_time, -8.0, 1.0, DEFAULT_CALIBRATION.timing_for("falcon9"), CAPE_CANAVERAL.timezone)
    assert window.start_formatted == "8:01 PM"


def test_viewing_window_daytime(launch_time):
    window = viewing_window(launch_time, 30.0, 0.15, DEFAULT_CALIBRATION.timing_for("falcon9"), VANDENBERG.timezone)
    assert window.start_utc is None
    assert window.end_formatted is None
    assert window.duration_min == 0
    assert window.description.startswith("Daytime launch")


def test_viewing_window_low_sun_description(launch_time):
    window = viewing_window(launch_time, 5.0, 0.3, DEFAULT_CALIBRATION.timing_for("falcon9"), VANDENBERG.timezone)
    assert window.description.startswith("Estimated visible")


def test_blocked_recommendations():
    assert _recs(blocker="Overcast") == ["Overcast", BLOCKED_FOLLOW_UP]


def test_optimal_twilight_recommendation_order():
    recs = _recs()
    assert recs[0].startswith("Optimal twilight timing!")
    assert recs[1] == "At 280 miles, you're at an optimal viewing distance. Look south along the coast."
    assert recs[2].startswith("Marine fog")
    assert recs[-1] == trust_note("twilight", "falcon9")


def test_cloud_and_air_quality_caveats():
    scores = SubScores(
        cloud=0.3,
        sun=1.0,
        distance=0.8,
        bearing=1.0,
        clarity=0.3,
        plume=0.6,
        brightness=0.85,
        obstruction=0.9,
    )
    recs = _recs(sub_scores=scores, aqi=160.0)
    assert "Cloud cover may obstruct viewing. Check conditions closer to launch time." in recs
    assert "Air quality is reducing visibility. Consider a higher elevation viewing spot." in recs


@pytest.mark.parametrize(
    "distance_km,prefix",
    [
        (0.0, "You are at Vandenberg itself."),
        (150.0, "At 93 miles, you're very close."),
        (1000.0, "At 621 miles, binoculars or a camera with zoom will help spot the rocket."),
    ],
)
def test_distance_tiers(distance_km, prefix):
    assert _recs(distance_km=distance_km)[1].startswith(prefix)


def test_out_of_range_gets_no_distance_tip():
    scores = SubScores(**{**GOOD.as_dict(), "distance": 0.0})
    recs = _recs(distance_km=3000.0, sub_scores=scores)
    assert not any(r.startswith("At 1864 miles") for r in recs)


def test_site_tips():
    starlink = _recs(mission_name="Starlink Group 11-1")
    assert any("polar-orbit" in r for r in starlink)
    boca = _recs(site=BOCA_CHICA, mission_name="Starship Flight 6", rocket_type="starship")
    assert any("33 Raptor engines" in r for r in boca)
    cape = _recs(site=CAPE_CANAVERAL, lighting="night", solar_elevation=-30.0)
    assert cape[0].startswith("Night launch")
    assert any("Florida humidity" in r for r in cape)


def test_direction_text():
    assert site_direction_text(CAPE_CANAVERAL) == "Look east-northeast over the Atlantic"


def test_trust_note_variants():
    assert "SAOCOM-1A" in trust_note("twilight", "falcon9")
    assert "Space Shuttle" in trust_note("twilight", "starship")
    assert "exhaust glow" in trust_note("night", "falcon9")
    assert "~125 miles" in trust_note("day", "falcon9")
    assert "Small launchers" in trust_note("twilight", "smallRocket")


@pytest.mark.parametrize("lighting,elevation", [("twilight", -15.0), ("night", -30.0), ("day", 20.0)])
def test_timing_line_leads_every_unblocked_list(lighting, elevation):
    scores = SubScores(**{**GOOD.as_dict(), "distance": 0.0})
    recs = _recs(
        lighting=lighting,
        solar_elevation=elevation,
        sub_scores=scores,
        distance_km=3000.0,
        site=CAPE_CANAVERAL,
        mission_name="GPS III",
    )
    assert recs[-1] == trust_note(lighting, "falcon9")
    assert len(recs) == 3
    assert not any(r.startswith("Conditions look reasonable") for r in recs)
