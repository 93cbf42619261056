"""Shared utilities for the PO analytics package."""

from po_analytics.utils.io import read_table_file, write_output
from po_analytics.utils.validators import validate_dataframe
from po_analytics.utils.types import PeriodType, PriceScoringMode, TrendMetric
