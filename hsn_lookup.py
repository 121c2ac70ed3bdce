import logging

import pandas as pd # type: ignore
from rapidfuzz import process, fuzz, utils as fuzz_utils # type: ignore

from gst_validation import validate_hsn_or_sac

logger = logging.getLogger(__name__)


class HSNLookup:
    def __init__(self, csv_path: str):
        """Load HSN/SAC master (CSV must have columns: hsn_code, Description, rate; type optional)."""
        df = pd.read_csv(csv_path, dtype=str)
        # normalize columns (case-insensitive)
        df.columns = [c.strip().lower() for c in df.columns]
        for alias in ("hsn", "code"):
            if alias in df.columns and "hsn_code" not in df.columns:
                df.rename(columns={alias: "hsn_code"}, inplace=True)
        if "hsn_code" not in df.columns:
            raise ValueError("CSV must have an HSN code column")
        if "description" not in df.columns:
            raise ValueError("CSV must have a Description column")
        if "rate" not in df.columns:
            raise ValueError("CSV must have a Rate column")

        df["hsn_code"] = df["hsn_code"].astype(str).str.strip()
        df["rate"] = pd.to_numeric(df["rate"], errors="coerce").fillna(0.0)
        valid = df["hsn_code"].map(lambda c: validate_hsn_or_sac(c).is_valid)
        if not valid.all():
            logger.warning("Dropping %d rows with malformed HSN/SAC codes from %s",
                           int((~valid).sum()), csv_path)
        self.df = df[valid].reset_index(drop=True)
        if "type" not in self.df.columns:
            self.df["type"] = self.df["hsn_code"].map(lambda c: validate_hsn_or_sac(c).code_type)

    def suggest(self, description: str, limit: int = 1):
        """Suggest closest HSN/SAC codes for an item description."""
        if not description or self.df.empty:
            return []
        choices = self.df['description'].astype(str).tolist()
        matches = process.extract(description, choices, scorer=fuzz.WRatio,
                                  processor=fuzz_utils.default_process, limit=limit)
        results = []
        for match, score, idx in matches:
            row = self.df.iloc[idx]
            results.append({
                "hsn_code": row['hsn_code'],
                "description": row['description'],
                "type": row['type'],
                "rate": float(row['rate']),
                "score": score
            })
        return results

    def rate_for(self, code: str):
        """GST rate for an exact HSN/SAC code, or None when not in the master."""
        hits = self.df[self.df['hsn_code'] == str(code).strip()]
        if hits.empty:
            return None
        return float(hits.iloc[0]['rate'])
