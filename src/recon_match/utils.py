import pandas as pd

def normalize_day(value) -> pd.Timestamp:
    """Midnight of the calendar day `value` falls on (wall-clock, timezone dropped)."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()

def day_difference(a, b) -> int:
    return abs((normalize_day(a) - normalize_day(b)).days)

def coerce_date(series: pd.Series) -> pd.Series:
    return pd.to_datetime(series, errors="coerce").dt.normalize()

def coerce_amount(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors="coerce").astype("float64")

def clean_text(value) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()
