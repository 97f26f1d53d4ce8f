"""
Reference table loading.

Tax brackets and CPI history live in JSON files so new years can be added
without touching calculation code. Files are validated with pydantic and
cached for the life of the process.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import PositiveFloat, TypeAdapter, ValidationError

from calcdesk.config import get_settings
from calcdesk.calculations.tax import TaxTable

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_TAX_TABLES_PATH = DATA_DIR / "tax_brackets.json"
DEFAULT_CPI_PATH = DATA_DIR / "cpi.json"

TaxTables = Dict[int, TaxTable]
CpiData = Dict[int, Dict[int, PositiveFloat]]

_tax_tables_adapter = TypeAdapter(TaxTables)
_cpi_adapter = TypeAdapter(CpiData)


def _read(path: Union[str, Path], adapter: TypeAdapter, label: str):
    path = Path(path)
    try:
        data = adapter.validate_json(path.read_bytes())
    except OSError:
        logger.error(f"Cannot read {label} file: {path}")
        raise
    except ValidationError:
        logger.error(f"Invalid {label} file: {path}")
        raise
    logger.info(f"Loaded {label} for {len(data)} years from {path}")
    return data


def load_tax_tables(path: Union[str, Path] = DEFAULT_TAX_TABLES_PATH) -> TaxTables:
    """Load and validate tax tables keyed by year."""
    return _read(path, _tax_tables_adapter, "tax tables")


def load_cpi_table(path: Union[str, Path] = DEFAULT_CPI_PATH) -> CpiData:
    """Load and validate monthly CPI values keyed by year, then month (1-12)."""
    data = _read(path, _cpi_adapter, "CPI data")
    for year, months in data.items():
        if any(not 1 <= month <= 12 for month in months):
            raise ValueError(f"CPI data for {year} has a month outside 1-12")
    return data


def _configured(path: Optional[str], default: Path) -> Path:
    return Path(path) if path else default


@lru_cache()
def get_tax_tables() -> TaxTables:
    """Get cached tax tables from the configured path."""
    settings = get_settings()
    return load_tax_tables(_configured(settings.tax_tables_path, DEFAULT_TAX_TABLES_PATH))


@lru_cache()
def get_cpi_table() -> CpiData:
    """Get cached CPI data from the configured path."""
    settings = get_settings()
    return load_cpi_table(_configured(settings.cpi_data_path, DEFAULT_CPI_PATH))
