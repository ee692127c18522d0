from __future__ import annotations

from ..models.conversion_result import ConversionResult

"""SUMMARY line rendering for a completed conversion."""


def _format_number(value: float) -> str:
    # Integers without a decimal point, tiny values without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(result: ConversionResult) -> str:
    """Render the SUMMARY line for ``result``.

    Format:
    SUMMARY sheet={id} table={table} columns={n} rows={n} elapsed_sec={x} throughput_rps={y}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ConversionResult(
        ...     sheet_id="ABC123", destination="out.db", table_name="walkthrough_data",
        ...     column_names=["Name", "Age"], converted_rows=1000,
        ...     start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=500.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY sheet=ABC123 table=walkthrough_data columns=2 rows=1000 elapsed_sec=2 throughput_rps=500'
    """
    return (
        f"SUMMARY sheet={result.sheet_id} "
        f"table={result.table_name} "
        f"columns={result.total_columns} "
        f"rows={result.converted_rows} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
