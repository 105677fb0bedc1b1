"""CLI entry point for the data_cleaning module."""

from __future__ import annotations

from pathlib import Path
import sys

# Add project root to Python path for direct execution.
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from hoep_arima.constants import CLEANED_PRICE_FILE, RAW_PRICE_FILE
from hoep_arima.data_cleaning.data_cleaning import clean_price_observations
from hoep_arima.utils import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Load, clean and save the price table from the command line.

    Any handled error leads to a non-zero exit code to ease automation.
    """
    logger.info("Launching data_cleaning CLI")

    try:
        _, report = clean_price_observations(RAW_PRICE_FILE, output_file=CLEANED_PRICE_FILE)
        logger.info(
            "Data cleaning completed: %d rows kept, %d outliers removed",
            report.rows_kept,
            report.outliers_removed,
        )
    except (FileNotFoundError, KeyError, ValueError, OSError) as e:
        logger.error("Data cleaning failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
