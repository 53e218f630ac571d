from __future__ import annotations

from typing import Any, Sequence

import pandas as pd

from rarity.data_models import RARITY_TIERS, NormalizedRecord


def records_frame(records: Sequence[NormalizedRecord]) -> pd.DataFrame:
    columns = list(NormalizedRecord.field_names())
    return pd.DataFrame([record.to_dict() for record in records], columns=columns)


def summarize_records(records: Sequence[NormalizedRecord]) -> dict[str, Any]:
    """Tier distribution and headline numbers for a batch of scored records."""
    df = records_frame(records)
    total = len(df)
    if total == 0:
        return {
            "count": 0,
            "tier_counts": {name: 0 for name in RARITY_TIERS},
            "mean_score": None,
            "max_score": None,
            "rarest": None,
            "region_counts": {},
        }

    tier_counts = df["rarity_tier"].value_counts().reindex(list(RARITY_TIERS), fill_value=0)
    region_counts = df["region"].dropna().value_counts()
    scores = df["rarity_score"].astype(int)
    rarest_slug = df["car_slug"].iloc[int(scores.to_numpy().argmax())]

    return {
        "count": total,
        "tier_counts": {str(name): int(count) for name, count in tier_counts.items()},
        "mean_score": round(float(scores.mean()), 2),
        "max_score": int(scores.max()),
        "rarest": rarest_slug if isinstance(rarest_slug, str) else None,
        "region_counts": {str(name): int(count) for name, count in region_counts.items()},
    }
