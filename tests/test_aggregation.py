"""Tests unitaires pour l'agrégation par puesto de votación."""

import pytest

from votovision.data.parser import parse_csv
from votovision.data.schemas import LocationType
from votovision.engine.aggregation import (
    aggregate_by_location,
    location_key,
    locations_to_frame,
    records_to_frame,
)
from votovision.engine.jitter import jitter_offset
from tests.helpers import COORDS, make_line, make_record


class TestAggregateByLocation:
    """Tests du regroupement et des totaux."""

    def test_single_record(self):
        """Exemple : une ligne, comuna connue."""
        locations = aggregate_by_location(parse_csv(make_line()), COORDS)

        assert len(locations) == 1
        loc = locations[0]
        assert loc.name == "IE LA FLORIDA"
        assert loc.parent_location == "COMUNA 1"
        assert loc.location_type == LocationType.PUESTO
        assert loc.total_votes == 120
        assert loc.candidates == {"CANDIDATE A": 120}

        key = "IE LA FLORIDA-COMUNA 1"
        assert loc.lat == pytest.approx(6.2930 + jitter_offset(key, "lat"))
        assert loc.lng == pytest.approx(-75.5470 + jitter_offset(key, "lng"))
        assert abs(loc.lat - 6.2930) <= 0.0075
        assert abs(loc.lng + 75.5470) <= 0.0075

    def test_same_place_two_candidates(self):
        records = [
            make_record(candidate="A", votes=50),
            make_record(candidate="B", votes=30),
        ]
        locations = aggregate_by_location(records, COORDS)

        assert len(locations) == 1
        assert locations[0].total_votes == 80
        assert locations[0].candidates == {"A": 50, "B": 30}

    def test_same_candidate_accumulates(self):
        records = [make_record(votes=10), make_record(votes=15)]
        loc = aggregate_by_location(records, COORDS)[0]
        assert loc.candidates == {"CANDIDATE A": 25}

    def test_unknown_zone_excluded(self):
        records = [
            make_record(commune="UNKNOWN ZONE", municipality="NOWHERE", votes=999),
            make_record(votes=10),
        ]
        locations = aggregate_by_location(records, COORDS)
        assert len(locations) == 1
        assert sum(loc.total_votes for loc in locations) == 10

    def test_municipality_fallback(self):
        """Comuna vide → zone parente et centroïde du municipio."""
        loc = aggregate_by_location(
            [make_record(place="IE FERNANDO VELEZ", commune="", municipality="BELLO")], COORDS,
        )[0]
        assert loc.parent_location == "BELLO"
        assert abs(loc.lat - 6.3373) <= 0.0075

    def test_unknown_commune_uses_municipality_coordinates(self):
        """Comuna absente de la table : centroïde du municipio, zone = comuna."""
        loc = aggregate_by_location(
            [make_record(commune="VEREDA X", municipality="BELLO")], COORDS,
        )[0]
        assert loc.parent_location == "VEREDA X"
        assert abs(loc.lat - 6.3373) <= 0.0075

    def test_same_place_two_zones(self):
        """Un même nom de puesto sous deux zones → deux entrées."""
        records = [
            make_record(commune="COMUNA 1", votes=5),
            make_record(commune="COMUNA 14", votes=7),
        ]
        locations = aggregate_by_location(records, COORDS)
        assert [loc.parent_location for loc in locations] == ["COMUNA 1", "COMUNA 14"]
        assert [loc.total_votes for loc in locations] == [5, 7]

    def test_zero_votes_accumulated(self):
        loc = aggregate_by_location([make_record(candidate="Z", votes=0)], COORDS)[0]
        assert loc.total_votes == 0
        assert loc.candidates == {"Z": 0}

    def test_first_seen_order(self):
        records = [
            make_record(place="B"), make_record(place="A"), make_record(place="B"),
        ]
        assert [loc.name for loc in aggregate_by_location(records, COORDS)] == ["B", "A"]

    def test_total_equals_candidate_sum(self):
        records = [
            make_record(place=f"P{i % 4}", candidate=f"C{i % 3}", votes=i)
            for i in range(30)
        ]
        for loc in aggregate_by_location(records, COORDS):
            assert loc.total_votes == sum(loc.candidates.values())

    def test_idempotent(self):
        records = [make_record(place=f"P{i % 5}", votes=i) for i in range(20)]
        first = aggregate_by_location(records, COORDS)
        second = aggregate_by_location(records, COORDS)
        assert [loc.model_dump() for loc in first] == [loc.model_dump() for loc in second]

    def test_empty(self):
        assert aggregate_by_location([], COORDS) == []

    def test_default_table(self):
        """Sans table explicite, la table embarquée est utilisée."""
        locations = aggregate_by_location([make_record()])
        assert locations[0].parent_location == "COMUNA 1"


class TestFrames:
    """Tests de l'export tabulaire."""

    def test_records_frame(self):
        df = records_to_frame([make_record(votes=3), make_record(votes=4)])
        assert len(df) == 2
        assert df["votes"].sum() == 7
        assert "polling_place_name" in df.columns

    def test_locations_frame_sorted(self):
        records = [
            make_record(place="SMALL", votes=5),
            make_record(place="BIG", candidate="X", votes=50),
            make_record(place="BIG", candidate="Y", votes=10),
        ]
        df = locations_to_frame(aggregate_by_location(records, COORDS))
        assert list(df["puesto"]) == ["BIG", "SMALL"]
        assert df.loc[0, "candidato_lider"] == "X"
        assert df.loc[0, "votos"] == 60

    def test_empty_frames(self):
        assert locations_to_frame([]).empty
        assert records_to_frame([]).empty


def test_location_key():
    assert location_key("IE LA FLORIDA", "COMUNA 1") == "IE LA FLORIDA-COMUNA 1"
