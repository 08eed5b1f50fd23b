from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd

from nz_holidays.holidays_nz import year_holidays

OUT_DIR = Path("data")


def build_table(year: int) -> pd.DataFrame:
    df = pd.DataFrame([h.to_dict() for h in year_holidays(year)])
    df["regions"] = df["regions"].map(lambda rs: ";".join(rs))
    df["weekday"] = pd.to_datetime(df["date"]).dt.day_name()
    return df.sort_values(["date", "type", "name"], kind="stable").reset_index(drop=True)


def main() -> None:
    years = [int(y) for y in sys.argv[1:]] or [2025]

    OUT_DIR.mkdir(parents=True, exist_ok=True)
    for year in years:
        df = build_table(year)
        out_path = OUT_DIR / f"nz_holidays_{year}.csv"
        df.to_csv(out_path, index=False)
        print(f"Wrote {out_path} ({len(df)} holidays)")


if __name__ == "__main__":
    main()
