"""Tests for the seeded sample data generator."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from data.sample_data import (
    generate_tables_df,
    generate_seats_df,
    generate_people_df,
    generate_preferences_df,
    generate_sample_csvs,
)
from data.validator import validate_tables, validate_seats, validate_people, validate_cross_file
from engine.clustering import group_tables_into_zones
from data.loader import parse_tables
from config.defaults import DEPARTMENTS


class TestSampleData:
    def test_same_seed_same_data(self):
        assert generate_people_df(seed=7).equals(generate_people_df(seed=7))
        assert generate_seats_df(seed=7).equals(generate_seats_df(seed=7))

    def test_different_seed_differs(self):
        assert not generate_people_df(seed=1).equals(generate_people_df(seed=2))

    def test_generated_files_validate(self):
        tables = generate_tables_df()
        seats = generate_seats_df()
        people = generate_people_df()

        assert validate_tables(tables).is_valid
        assert validate_seats(seats).is_valid
        assert validate_people(people).is_valid
        assert validate_cross_file(tables, seats, people).warnings == []

    def test_every_table_has_capacity_seats(self):
        tables = generate_tables_df()
        seats = generate_seats_df()
        counts = seats.groupby("Table ID").size()
        for _, row in tables.iterrows():
            assert counts[row["Table ID"]] == row["Capacity"]

    def test_pods_form_from_geometry(self):
        zones = group_tables_into_zones(parse_tables(generate_tables_df(pods_x=2, pods_y=2)))
        assert len(zones) == 4
        assert all(len(z.table_ids) == 9 for z in zones)

    def test_roster_shape(self):
        people = generate_people_df()
        leaders = people[people["Role"] == "LEADER"]
        assert sorted(leaders["Department"].unique()) == sorted(DEPARTMENTS)
        assert leaders.groupby("Department").size().eq(2).all()
        assert people["Person ID"].is_unique

    def test_preferences_cover_leaders(self):
        people = generate_people_df()
        prefs = generate_preferences_df(people)
        assert set(prefs["Leader ID"]) == set(people[people["Role"] == "LEADER"]["Person ID"])

    def test_csv_export(self, tmp_path):
        generate_sample_csvs(str(tmp_path))
        for name in ["tables.csv", "seats.csv", "people.csv", "preferences.csv"]:
            assert (tmp_path / name).exists()


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
