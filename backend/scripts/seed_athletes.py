#!/usr/bin/env python3
"""Load the athlete roster from a CSV file.

The CSV needs a header row with id,name,team,event. `name` must match the
club display name ("First Last") and `team` must be bulls or sharks.
Rows whose id is already stored are skipped, so the file can be re-run
after adding athletes.

Usage:
    python backend/scripts/seed_athletes.py --csv roster.csv
    python backend/scripts/seed_athletes.py --csv roster.csv --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import csv
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.db.session import AsyncSessionLocal, init_db
from app.features.athletes import AthleteRepository
from app.shared.constants import Team

REQUIRED_COLUMNS = ("id", "name", "team")
TEAMS = {team.value for team in Team}


def read_roster(path: Path) -> list[dict]:
    """Read and validate roster rows."""
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise SystemExit(f"{path}: missing columns: {', '.join(missing)}")

        rows = []
        for line_no, row in enumerate(reader, start=2):
            team = row["team"].strip().lower()
            if team not in TEAMS:
                raise SystemExit(f"{path}:{line_no}: unknown team '{row['team']}'")
            rows.append({
                "id": row["id"].strip(),
                "name": row["name"].strip(),
                "team": team,
                "event": (row.get("event") or "").strip() or None,
            })
    return rows


async def seed_athletes(rows: list[dict]) -> int:
    await init_db()
    async with AsyncSessionLocal() as db:
        inserted = await AthleteRepository(db).insert_athletes(rows)
        await db.commit()
    return inserted


def main() -> None:
    parser = argparse.ArgumentParser(description="Load the athlete roster from CSV")
    parser.add_argument("--csv", required=True, type=Path, help="Roster CSV (id,name,team,event)")
    parser.add_argument("--dry-run", action="store_true", help="Validate and print, do not write")
    args = parser.parse_args()

    rows = read_roster(args.csv)
    if args.dry_run:
        for row in rows:
            print(f"{row['id']:>10}  {row['name']:<30} {row['team']:<7} {row['event'] or ''}")
        print(f"{len(rows)} athletes")
        return

    inserted = asyncio.run(seed_athletes(rows))
    print(f"Inserted {inserted} new of {len(rows)} athletes")


if __name__ == "__main__":
    main()
