"""Soft preference scoring of seats for leaders."""

from typing import List, Optional, Tuple

from models.floor import Seat
from models.preferences import PreferenceSet
from config.defaults import POSITIONAL_PREFERENCE_WEIGHT, PREMIUM_PREFERENCE_WEIGHT

# preference flag -> (seat attribute, weight)
# near_team has no seat attribute: leaders are seated before any team table
# exists, so it never scores.
PREFERENCE_ATTRIBUTES = {
    "near_window": ("near_window", POSITIONAL_PREFERENCE_WEIGHT),
    "near_entry": ("near_entry", POSITIONAL_PREFERENCE_WEIGHT),
    "quiet_zone": ("quiet_zone", POSITIONAL_PREFERENCE_WEIGHT),
    "corner_edge": ("corner", POSITIONAL_PREFERENCE_WEIGHT),
    "premium": ("premium", PREMIUM_PREFERENCE_WEIGHT),
}


def matched_preferences(seat: Seat, preferences: PreferenceSet) -> List[str]:
    """Preference flags that are set and satisfied by this seat."""
    matched = []
    for flag in preferences.active_flags():
        mapping = PREFERENCE_ATTRIBUTES.get(flag)
        if mapping and getattr(seat.attributes, mapping[0]):
            matched.append(flag)
    return matched


def score_seat(seat: Seat, preferences: PreferenceSet) -> int:
    """Score a seat against a person's preferences. Never negative."""
    return sum(PREFERENCE_ATTRIBUTES[flag][1] for flag in matched_preferences(seat, preferences))


def rank_seats(seats: List[Seat], preferences: PreferenceSet) -> List[Tuple[Seat, int]]:
    """Seats with scores, best first; ties broken by seat id ascending."""
    scored = [(s, score_seat(s, preferences)) for s in seats]
    scored.sort(key=lambda item: (-item[1], item[0].seat_id))
    return scored


def pick_best_seat(seats: List[Seat], preferences: PreferenceSet) -> Optional[Tuple[Seat, int]]:
    ranked = rank_seats(seats, preferences)
    return ranked[0] if ranked else None
