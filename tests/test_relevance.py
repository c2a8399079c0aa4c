from __future__ import annotations

from engine.relevance import classify_track_matches, partition_track_matches


def test_parenthetical_artist_credit_is_not_primary() -> None:
    candidates = [
        ("bad guy (remix)", "Billie Eilish (feat. X)"),
        ("bad guy", "Billie Eilish"),
    ]
    ordered = classify_track_matches("bad guy", candidates)
    assert ordered[0] == ("bad guy", "Billie Eilish")


def test_exact_artist_credit_stays_ahead_of_feature_credit() -> None:
    candidates = [("bad guy", "Billie Eilish"), ("bad guy (remix)", "Billie Eilish (feat. X)")]
    assert classify_track_matches("bad guy", candidates) == candidates


def test_primary_requires_title_and_artist_match() -> None:
    candidates = [
        ("Yellow", "Coldplay"),
        ("Coldplay Yellow Cover", "Karaoke Band"),
        ("Clocks", "Coldplay"),
        ("Yellow Coldplay", "Coldplay"),
    ]
    primary, secondary = partition_track_matches("coldplay yellow", candidates)
    assert primary == [("Yellow", "Coldplay"), ("Yellow Coldplay", "Coldplay")]
    assert secondary == [("Coldplay Yellow Cover", "Karaoke Band"), ("Clocks", "Coldplay")]


def test_provider_order_preserved_within_buckets() -> None:
    candidates = [("b", "x"), ("test one", "test a"), ("c", "y"), ("test two", "test b")]
    assert classify_track_matches("TEST", candidates) == [
        ("test one", "test a"),
        ("test two", "test b"),
        ("b", "x"),
        ("c", "y"),
    ]


def test_blank_query_leaves_order_untouched() -> None:
    candidates = [("a", "b"), ("c", "d")]
    assert classify_track_matches("   ", candidates) == candidates


def test_key_functions_classify_records() -> None:
    records = [{"title": "Other", "by": "Nobody"}, {"title": "Hello", "by": "Adele"}]
    ordered = classify_track_matches(
        "adele hello",
        records,
        name=lambda record: record["title"],
        artist=lambda record: record["by"],
    )
    assert ordered[0]["title"] == "Hello"
