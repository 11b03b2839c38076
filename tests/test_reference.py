"""Tests for the static stream and hatch catalogs."""

from __future__ import annotations

import pytest

from hatchcast.reference import (
    HATCHES,
    STREAMS,
    all_station_ids,
    get_hatch,
    get_location,
    hatches_by_month,
    hatches_by_order,
    hatches_by_temp,
    haversine_miles,
    locations_by_region,
    locations_by_state,
    locations_near,
)
from hatchcast.schemas import Coordinates, InsectOrder, Location, Region, State


class TestStreams:
    """Stream catalog."""

    def test_ids_unique(self) -> None:
        ids = [loc.id for loc in STREAMS]
        assert len(ids) == len(set(ids))

    def test_every_stream_has_stations_and_coordinates(self) -> None:
        for loc in STREAMS:
            assert loc.station_ids, loc.id
            assert loc.coordinates is not None, loc.id

    def test_get_location(self) -> None:
        beaverkill = get_location("beaverkill")
        assert beaverkill is not None
        assert beaverkill.station_ids == ("01420500",)
        assert get_location("missing") is None

    def test_filters(self) -> None:
        assert {loc.state for loc in locations_by_region(Region.CATSKILLS)} == {State.NY}
        assert all(loc.state == State.NC for loc in locations_by_state("NC"))
        assert len(locations_by_region("croton")) == 3

    def test_all_station_ids_sorted_and_unique(self) -> None:
        ids = all_station_ids()
        assert ids == sorted(set(ids))
        assert "01420500" in ids


class TestHatches:
    """Hatch catalog."""

    def test_ids_unique(self) -> None:
        ids = [h.id for h in HATCHES]
        assert len(ids) == len(set(ids))

    def test_ranges_valid(self) -> None:
        for hatch in HATCHES:
            assert hatch.min_temp_f <= hatch.max_temp_f
            assert all(1 <= m <= 12 for m in hatch.peak_months)

    def test_midge_year_round(self) -> None:
        midge = get_hatch("midge")
        assert midge is not None
        assert all(midge in hatches_by_month(m) for m in range(1, 13))

    def test_filters(self) -> None:
        assert {h.id for h in hatches_by_temp(42)} == {"early-brown-stone", "midge"}
        assert all(h.order == InsectOrder.STONEFLY for h in hatches_by_order(InsectOrder.STONEFLY))
        assert "hendrickson" in {h.id for h in hatches_by_month(4)}


class TestProximity:
    """Distance and nearby-stream lookups."""

    BEAVERKILL = Coordinates(latitude=41.9365, longitude=-74.9201)

    def test_haversine_same_point(self) -> None:
        assert haversine_miles(self.BEAVERKILL, self.BEAVERKILL) == 0.0

    def test_haversine_one_degree_of_latitude(self) -> None:
        a = Coordinates(latitude=40.0, longitude=-75.0)
        b = Coordinates(latitude=41.0, longitude=-75.0)
        assert haversine_miles(a, b) == pytest.approx(69.09, abs=0.01)
        assert haversine_miles(a, b) == haversine_miles(b, a)

    def test_nearest_first(self) -> None:
        nearby = locations_near(self.BEAVERKILL, radius_miles=10)

        assert nearby[0] == (get_location("beaverkill"), 0.0)
        assert "willowemoc" in {loc.id for loc, _ in nearby}
        distances = [d for _, d in nearby]
        assert distances == sorted(distances)
        assert all(d <= 10 for d in distances)

    def test_default_radius(self) -> None:
        ids = {loc.id for loc, _ in locations_near(self.BEAVERKILL)}
        assert "willowemoc" in ids
        assert "farmington" not in ids
        assert not any(loc.state == State.NC for loc, _ in locations_near(self.BEAVERKILL))

    def test_skips_streams_without_coordinates(self) -> None:
        bare = Location(id="bare", name="Bare", region=Region.CATSKILLS, state=State.NY)
        assert locations_near(self.BEAVERKILL, locations=[bare]) == []

    @pytest.mark.parametrize("radius", [0, -5, 500.1])
    def test_invalid_radius(self, radius: float) -> None:
        with pytest.raises(ValueError, match="radius"):
            locations_near(self.BEAVERKILL, radius_miles=radius)

    def test_max_radius_allowed(self) -> None:
        assert len(locations_near(self.BEAVERKILL, radius_miles=500)) > 1
