# utils/validators.py
import pandas as pd


# -----------------------------
# Safe numeric conversions
# -----------------------------
def safe_float(val):
    """Convert to float safely (handles comma decimals, NaN)."""
    try:
        if val is not None and pd.notna(val):
            if isinstance(val, str):
                val = val.replace(",", ".")
            return float(val)
    except (TypeError, ValueError):
        pass
    return None
