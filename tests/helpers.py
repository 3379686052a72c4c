"""Constructeurs de lignes d'export et de registres pour les tests."""

from votovision.data.schemas import VoteRecord

COORDS = {
    "COMUNA 1": {"lat": 6.2930, "lng": -75.5470},
    "COMUNA 14": {"lat": 6.2090, "lng": -75.5680},
    "BELLO": {"lat": 6.3373, "lng": -75.5580},
}


def make_line(
    place="IE LA FLORIDA",
    commune="COMUNA 1",
    municipality="MEDELLIN",
    candidate="CANDIDATE A",
    votes="120",
):
    fields = [
        "05", "ANTIOQUIA", "05001", municipality, "01", "01", place, "1",
        "01", commune, "3", "CONCEJO", "1", "PARTYCODE", "PARTY X",
        "CAND01", candidate,
    ]
    return ",".join(f'"{f}"' for f in fields) + f",{votes}"


def make_record(
    place="IE LA FLORIDA",
    commune="COMUNA 1",
    municipality="MEDELLIN",
    candidate="CANDIDATE A",
    votes=120,
):
    return VoteRecord(
        department_code="05", department_name="ANTIOQUIA",
        municipality_code="05001", municipality_name=municipality,
        zone_code="01", sector_code="01", polling_place_name=place, table_number="1",
        commune_code="01", commune_name=commune,
        corporation_code="3", corporation_name="CONCEJO",
        candidate_code="CAND01", candidate_name=candidate,
        party_code="PARTYCODE", party_name="PARTY X",
        votes=votes,
    )
