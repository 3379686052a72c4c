"""Tests unitaires pour la carte Folium et les graphiques."""

import folium
import pytest

from votovision.data.schemas import GroundingChunk, GroundingSource, LocationData
from votovision.viz.charts import bar_candidate_totals, bar_zone_totals
from votovision.viz.maps import (
    build_vote_map,
    grounding_link_html,
    marker_color,
    marker_radius,
    popup_html,
)


def loc(name="IE <LA> FLORIDA", votes=120):
    return LocationData(
        name=name,
        parent_location="COMUNA 1",
        lat=6.29,
        lng=-75.54,
        total_votes=votes,
        candidates={"A": votes},
    )


class TestDensityStyle:
    """Tests des seuils de densité (strictement supérieurs)."""

    @pytest.mark.parametrize("votes,radius,color", [
        (301, 12, "#7f0000"),
        (300, 10, "#b30000"),
        (151, 10, "#b30000"),
        (150, 8, "#d7301f"),
        (81, 8, "#d7301f"),
        (80, 6, "#fc8d59"),
        (41, 6, "#fc8d59"),
        (40, 4, "#fdcc8a"),
        (0, 4, "#fdcc8a"),
    ])
    def test_thresholds(self, votes, radius, color):
        assert marker_radius(votes) == radius
        assert marker_color(votes) == color


class TestVoteMap:
    """Tests de la construction de la carte."""

    def test_one_marker_per_location(self):
        m = build_vote_map([loc("A"), loc("B", 10)])
        markers = [c for c in m._children.values() if isinstance(c, folium.CircleMarker)]
        assert len(markers) == 2

    def test_empty_map(self):
        assert isinstance(build_vote_map([]), folium.Map)

    def test_popup_escapes_names(self):
        html = popup_html(loc())
        assert "IE &lt;LA&gt; FLORIDA" in html
        assert "Votos en Puesto : 120" in html


class TestCharts:

    def test_zone_chart(self):
        fig = bar_zone_totals([loc("A", 10), loc("B", 30)])
        assert list(fig.data[0].y) == ["COMUNA 1"]
        assert list(fig.data[0].x) == [40]

    def test_candidate_chart(self):
        fig = bar_candidate_totals([loc("A", 10), loc("B", 30)])
        assert list(fig.data[0].x) == ["A"]
        assert list(fig.data[0].y) == [40]


class TestGroundingLink:
    """Les références de l'assistant sont échappées avant affichage."""

    def test_escapes_title_and_uri(self):
        chunk = GroundingChunk(maps=GroundingSource(
            uri='https://maps.google.com/?q="><script>x</script>',
            title="<img src=x onerror=alert(1)>",
        ))
        html = grounding_link_html(chunk)
        assert "<script>" not in html
        assert "<img" not in html
        assert "&lt;img src=x onerror=alert(1)&gt;" in html
        assert 'href="https://maps.google.com/?q=&quot;&gt;' in html

    def test_title_falls_back_to_uri(self):
        chunk = GroundingChunk(maps=GroundingSource(uri="https://maps.google.com/?cid=1"))
        assert "📍 https://maps.google.com/?cid=1" in grounding_link_html(chunk)

    def test_web_only_chunk_has_no_link(self):
        chunk = GroundingChunk(web=GroundingSource(uri="https://x", title="X"))
        assert grounding_link_html(chunk) is None
