"""Tests for leader seat preference scoring."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.floor import Seat
from models.preferences import PreferenceSet, SeatAttributes
from engine.scoring import matched_preferences, score_seat, rank_seats, pick_best_seat


def make_seat(seat_id="S1", **attributes):
    return Seat(seat_id, 0, 0, None, SeatAttributes(**attributes))


class TestScoreSeat:
    def test_positional_preference_scores_ten(self):
        prefs = PreferenceSet(near_window=True)
        assert score_seat(make_seat(near_window=True), prefs) == 10
        assert score_seat(make_seat(), prefs) == 0

    def test_premium_scores_five(self):
        prefs = PreferenceSet(premium=True)
        assert score_seat(make_seat(premium=True), prefs) == 5

    def test_corner_edge_maps_to_corner(self):
        prefs = PreferenceSet(corner_edge=True)
        assert score_seat(make_seat(corner=True), prefs) == 10

    def test_scores_add_up(self):
        prefs = PreferenceSet(near_window=True, quiet_zone=True, premium=True)
        seat = make_seat(near_window=True, quiet_zone=True, premium=True)
        assert score_seat(seat, prefs) == 25

    def test_near_team_never_scores(self):
        prefs = PreferenceSet(near_team=True)
        seat = make_seat(near_window=True, near_entry=True, corner=True, premium=True)
        assert score_seat(seat, prefs) == 0

    def test_attributes_without_preference_do_not_score(self):
        seat = make_seat(near_window=True, premium=True)
        assert score_seat(seat, PreferenceSet()) == 0

    def test_matched_preferences(self):
        prefs = PreferenceSet(near_window=True, near_entry=True)
        assert matched_preferences(make_seat(near_entry=True), prefs) == ["near_entry"]


class TestRankSeats:
    def test_tagged_seat_wins(self):
        seats = [make_seat("S1"), make_seat("S2", near_window=True)]
        best, score = pick_best_seat(seats, PreferenceSet(near_window=True))
        assert best.seat_id == "S2"
        assert score == 10

    def test_ties_go_to_lowest_seat_id(self):
        seats = [make_seat("S3"), make_seat("S1"), make_seat("S2")]
        ranked = rank_seats(seats, PreferenceSet())
        assert [s.seat_id for s, _ in ranked] == ["S1", "S2", "S3"]

    def test_no_seats(self):
        assert pick_best_seat([], PreferenceSet(premium=True)) is None


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
