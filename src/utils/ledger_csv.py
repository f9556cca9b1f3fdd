"""
CSV ledger export reader.

Turns a ledger export into ``TransactionRecord`` objects for a detection run.
Columns are located by common header names, case-insensitively.
"""

import csv
import io
import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from models.transaction import TransactionRecord

logger = logging.getLogger(__name__)

COLUMN_NAMES: Dict[str, List[str]] = {
    'date': ['date', 'transaction date', 'posted date'],
    'amount': ['amount'],
    'merchantRaw': ['merchant', 'description', 'payee'],
    'categoryPrimary': ['category', 'primary category'],
    'accountName': ['account', 'account name'],
    'pending': ['pending', 'status'],
}

DATE_FORMATS = [
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y%m%d",
    "%m-%d-%Y",
    "%d-%m-%Y"
]


def find_column_index(header: List[str], possible_names: List[str]) -> Optional[int]:
    """Find the index of a column given possible column names."""
    # Convert header to lowercase for case-insensitive comparison
    header_lower = [col.strip().lower() for col in header]

    # Check for exact matches first
    for name in possible_names:
        if name in header_lower:
            return header_lower.index(name)

    # Check for partial matches
    for name in possible_names:
        for i, col in enumerate(header_lower):
            if name in col:
                return i

    return None


def parse_date(date_str: str) -> date:
    """Try to parse date string in various formats."""
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(date_str.strip(), fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date format: {date_str}")


def parse_ledger_csv(text_content: str) -> List[TransactionRecord]:
    """
    Parse a CSV ledger export.

    Args:
        text_content: Decoded CSV text with a header row

    Returns:
        Transaction records in file order

    Raises:
        ValueError: If the date column is missing or a date cannot be parsed
    """
    reader = csv.reader(io.StringIO(text_content), skipinitialspace=True)

    header = next(reader, None)
    if not header:
        return []

    columns = {field: find_column_index(header, names) for field, names in COLUMN_NAMES.items()}
    if columns['date'] is None:
        raise ValueError("Missing required column: Date")

    transactions = []
    for line_number, row in enumerate(reader, start=2):
        if not any(cell.strip() for cell in row):
            continue
        data = {
            field: row[index]
            for field, index in columns.items()
            if index is not None and index < len(row)
        }
        try:
            data['date'] = parse_date(data.get('date', ''))
        except ValueError as e:
            raise ValueError(f"Line {line_number}: {e}") from e
        transactions.append(TransactionRecord.model_validate(data))

    logger.info(f"Parsed {len(transactions)} transactions from CSV")
    return transactions
