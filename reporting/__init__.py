"""
Reporting — export formats, display tables, warnings, and scenario comparison.
"""

from .compare import ProjectionComparison, compare_projections
from .export import (
    projection_rows_to_csv,
    sanitize_file_name,
    write_projection_csv,
    write_projection_excel,
)
from .summary import (
    describe_debt_free,
    projection_to_dataframe,
    projection_warnings,
    summary_to_dataframe,
)

__all__ = [
    "ProjectionComparison",
    "compare_projections",
    "projection_rows_to_csv",
    "sanitize_file_name",
    "write_projection_csv",
    "write_projection_excel",
    "describe_debt_free",
    "projection_to_dataframe",
    "projection_warnings",
    "summary_to_dataframe",
]
