"""
CSV file reading for bank transaction exports.
Every cell is read as a string; column names are left untouched so the
mapper can resolve case-variant aliases.
"""
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from core.exceptions import InputFileError
from core.logger import setup_logger

logger = setup_logger(__name__)

RawRow = Dict[str, str]


def validate_csv_path(file_path: Union[str, Path]) -> Path:
    """
    Check that the given path names an existing .csv file.

    Args:
        file_path: Path supplied on the command line

    Returns:
        Path object for the file

    Raises:
        InputFileError: If the path is not a .csv file or does not exist
    """
    path = Path(file_path)
    if path.suffix.lower() != ".csv":
        raise InputFileError(
            f"Not a CSV file: {file_path}",
            details={"file_path": str(file_path)}
        )
    if not path.is_file():
        raise InputFileError(
            f"File not found: {file_path}",
            details={"file_path": str(file_path)}
        )
    return path


def read_csv_rows(file_path: Union[str, Path]) -> List[RawRow]:
    """
    Read a CSV file into a list of raw rows.

    Args:
        file_path: Path to CSV file

    Returns:
        List of column name -> string value mappings, in file order.
        A header-only or empty file yields an empty list.

    Raises:
        InputFileError: If the file doesn't exist or cannot be parsed
    """
    path = Path(file_path)
    if not path.is_file():
        raise InputFileError(
            f"File not found: {file_path}",
            details={"file_path": str(file_path)}
        )

    logger.info(f"Reading transactions from {path.name}")

    try:
        df = pd.read_csv(
            path,
            dtype=str,
            index_col=False,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"{path.name} is empty, no rows to import")
        return []
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        logger.error(f"Failed to parse {file_path}: {str(e)}")
        raise InputFileError(
            f"Invalid CSV format: {file_path}",
            details={"file_path": str(file_path), "error": str(e)}
        )

    logger.debug(f"Columns found: {list(df.columns)}")
    logger.info(f"Read {len(df)} rows from {path.name}")

    return df.to_dict(orient="records")
