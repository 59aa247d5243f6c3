"""Generate synthetic floor plans and org hierarchies for the Pod Seat Planner.

Every generator takes an explicit seed and draws from its own random.Random,
so the same seed always yields the same data.
"""

import pandas as pd
import random
import os
from typing import List, Optional

from config.defaults import DEPARTMENTS, SAMPLE_SEED, SPECIAL_NEEDS_RATE, SUB_MANAGER_RATE

MALE_NAMES = [
    "Aarav", "Aditya", "Arjun", "Aryan", "Dhruv", "Ishaan", "Kabir", "Krishna", "Lakshay", "Manav",
    "Mohit", "Nakul", "Nikhil", "Pranav", "Rahul", "Raj", "Rohan", "Sahil", "Shourya", "Tanmay",
    "Varun", "Vihaan", "Vivaan", "Yash", "Kunal", "Aman", "Ankit", "Ashish", "Deepak", "Gaurav",
]

FEMALE_NAMES = [
    "Aadhya", "Aanya", "Aditi", "Ananya", "Anjali", "Apoorva", "Diya", "Ishita", "Jiya", "Kavya",
    "Khushi", "Kiara", "Mira", "Myra", "Navya", "Pari", "Priya", "Riya", "Saanvi", "Sara",
    "Shanaya", "Shreya", "Siya", "Tara", "Zara", "Meera", "Neha", "Pooja", "Preeti", "Radhika",
]

# Floor geometry (floor plan units)
TABLE_WIDTH = 160
TABLE_HEIGHT = 60
SEATS_PER_SIDE = 4
TABLE_SPACING_X = 220
TABLE_SPACING_Y = 160
TABLES_PER_POD_X = 3
TABLES_PER_POD_Y = 3
POD_GAP = 400
SEAT_OFFSET = 15
CLICK_NOISE = 4


def _table_origins(pods_x: int, pods_y: int):
    pod_width = TABLES_PER_POD_X * TABLE_SPACING_X + POD_GAP
    pod_height = TABLES_PER_POD_Y * TABLE_SPACING_Y + POD_GAP
    for py in range(pods_y):
        for px in range(pods_x):
            for ty in range(TABLES_PER_POD_Y):
                for tx in range(TABLES_PER_POD_X):
                    yield (px, py, tx, ty,
                           100 + px * pod_width + tx * TABLE_SPACING_X,
                           100 + py * pod_height + ty * TABLE_SPACING_Y)


def generate_tables_df(pods_x: int = 4, pods_y: int = 3) -> pd.DataFrame:
    """Generate table geometry: pods of 3x3 tables, 8 seats per table."""
    rows = []
    for i, (_, _, _, _, x, y) in enumerate(_table_origins(pods_x, pods_y), start=1):
        rows.append({
            "Table ID": f"TBL-{i:03d}",
            "X": x,
            "Y": y,
            "Width": TABLE_WIDTH,
            "Height": TABLE_HEIGHT,
            "Capacity": SEATS_PER_SIDE * 2,
        })
    return pd.DataFrame(rows)


def generate_seats_df(pods_x: int = 4, pods_y: int = 3, seed: int = SAMPLE_SEED) -> pd.DataFrame:
    """Generate seats on both long sides of every table, with click noise.

    Window seats line the left edge of the floor, the entry is at the bottom
    right pod, and the top-right pod is the quiet zone.
    """
    rng = random.Random(seed)
    rows = []
    seat_counter = 1
    step = TABLE_WIDTH / SEATS_PER_SIDE

    for i, (px, py, tx, ty, x, y) in enumerate(_table_origins(pods_x, pods_y), start=1):
        table_id = f"TBL-{i:03d}"
        for side, seat_y in enumerate([y - SEAT_OFFSET, y + TABLE_HEIGHT + SEAT_OFFSET]):
            for k in range(SEATS_PER_SIDE):
                is_end = k in (0, SEATS_PER_SIDE - 1)
                rows.append({
                    "Seat ID": f"S{seat_counter:04d}",
                    "X": round(x + step * (k + 0.5) + rng.uniform(-CLICK_NOISE, CLICK_NOISE), 1),
                    "Y": round(seat_y + rng.uniform(-CLICK_NOISE, CLICK_NOISE), 1),
                    "Table ID": table_id,
                    "Near Window": px == 0 and tx == 0 and k == 0,
                    "Near Entry": px == pods_x - 1 and py == pods_y - 1 and ty == TABLES_PER_POD_Y - 1,
                    "Corner": is_end and tx in (0, TABLES_PER_POD_X - 1) and ty in (0, TABLES_PER_POD_Y - 1),
                    "Quiet Zone": px == pods_x - 1 and py == 0,
                    "Accessible": side == 0 and k == 0,
                    "Premium": rng.random() < 0.05,
                })
                seat_counter += 1
    return pd.DataFrame(rows)


def generate_people_df(
    departments: Optional[List[str]] = None,
    leaders_per_department: int = 2,
    seed: int = SAMPLE_SEED,
) -> pd.DataFrame:
    """Generate a leader -> manager -> (sub-manager) -> employee hierarchy."""
    rng = random.Random(seed)
    departments = departments or DEPARTMENTS
    rows = []
    counters = {"L": 0, "M": 0, "SM": 0, "E": 0}
    name_idx = {"M": 0, "F": 0}

    def _person(prefix, width, department, role, reports_to, gender=None, special=False):
        counters[prefix] += 1
        gender = gender or rng.choice(["M", "F"])
        pool = MALE_NAMES if gender == "M" else FEMALE_NAMES
        name = pool[name_idx[gender] % len(pool)]
        name_idx[gender] += 1
        person_id = f"{prefix}{counters[prefix]:0{width}d}"
        rows.append({
            "Person ID": person_id,
            "Name": name,
            "Gender": gender,
            "Department": department,
            "Role": role,
            "Reports To": reports_to,
            "Special Needs": special,
        })
        return person_id

    for department in departments:
        for _ in range(leaders_per_department):
            leader_id = _person("L", 2, department, "LEADER", None)
            for _ in range(rng.randint(2, 3)):
                manager_id = _person("M", 3, department, "MANAGER", leader_id)
                for _ in range(rng.randint(2, 6)):
                    _person("E", 4, department, "EMPLOYEE", manager_id,
                            special=rng.random() < SPECIAL_NEEDS_RATE)
                if rng.random() < SUB_MANAGER_RATE:
                    sub_id = _person("SM", 3, department, "SUB_MANAGER", manager_id)
                    for _ in range(rng.randint(1, 3)):
                        _person("E", 4, department, "EMPLOYEE", sub_id,
                                special=rng.random() < SPECIAL_NEEDS_RATE)
    return pd.DataFrame(rows)


def generate_preferences_df(people_df: pd.DataFrame, seed: int = SAMPLE_SEED) -> pd.DataFrame:
    """Generate one preference row per leader in the roster."""
    rng = random.Random(seed)
    leaders = people_df[people_df["Role"] == "LEADER"]["Person ID"].tolist()
    rows = []
    for leader_id in leaders:
        rows.append({
            "Leader ID": leader_id,
            "Near Window": rng.random() < 0.5,
            "Near Entry": rng.random() < 0.2,
            "Quiet Zone": rng.random() < 0.3,
            "Corner/Edge": rng.random() < 0.3,
            "Near Team": rng.random() < 0.2,
            "Premium": rng.random() < 0.4,
        })
    return pd.DataFrame(rows)


def generate_sample_csvs(output_dir: str, seed: int = SAMPLE_SEED):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    people_df = generate_people_df(seed=seed)
    generate_tables_df().to_csv(os.path.join(output_dir, "tables.csv"), index=False)
    generate_seats_df(seed=seed).to_csv(os.path.join(output_dir, "seats.csv"), index=False)
    people_df.to_csv(os.path.join(output_dir, "people.csv"), index=False)
    generate_preferences_df(people_df, seed=seed).to_csv(
        os.path.join(output_dir, "preferences.csv"), index=False,
    )


def generate_sample_excel(output_dir: str, seed: int = SAMPLE_SEED):
    """Write a single multi-tab Excel file with all four datasets."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "sample_floor.xlsx")
    people_df = generate_people_df(seed=seed)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        generate_tables_df().to_excel(writer, sheet_name="Tables", index=False)
        generate_seats_df(seed=seed).to_excel(writer, sheet_name="Seats", index=False)
        people_df.to_excel(writer, sheet_name="People", index=False)
        generate_preferences_df(people_df, seed=seed).to_excel(writer, sheet_name="Preferences", index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    generate_sample_excel(out)
    print("Sample CSV and Excel files generated in sample_files/")
