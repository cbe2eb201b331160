"""Data loaders for the glucose log spreadsheet."""

from glucose_dashboard.loaders.sheet import SheetCsvLoader, fetch_readings

__all__ = ["SheetCsvLoader", "fetch_readings"]
