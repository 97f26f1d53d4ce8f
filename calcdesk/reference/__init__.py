"""
Versioned reference data (tax tables, CPI history).
"""

from calcdesk.reference.tables import (
    load_tax_tables,
    load_cpi_table,
    get_tax_tables,
    get_cpi_table,
)

__all__ = ["load_tax_tables", "load_cpi_table", "get_tax_tables", "get_cpi_table"]
