"""Delimited-text ledger parser."""
import csv
import io
from decimal import Decimal, InvalidOperation, getcontext
from typing import List, Optional

from .models import TransactionRecord
from ..utils.logger import get_logger
from ..utils.exceptions import FormatError

logger = get_logger()

REQUIRED_COLUMNS = ("date", "category", "amount")


class TransactionParser:
    """Turns CSV text with a date/category/amount header into records."""
    
    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter
    
    def parse(self, text: str) -> List[TransactionRecord]:
        """
        Parse ledger text into transaction records.
        
        Quoted fields may contain delimiters and line breaks.
        
        Args:
            text: Raw delimited text, first line is the header
            
        Returns:
            Records in input order. Header-only input gives an empty list.
            
        Raises:
            FormatError: If the header lacks date, category or amount
        """
        text = text.lstrip("\ufeff").strip()
        if not text:
            raise FormatError("CSV format invalid. Input is empty, expected a header row")
        
        rows = csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter)
        header = [cell.strip().lower() for cell in next(rows)]
        
        missing = [name for name in REQUIRED_COLUMNS if name not in header]
        if missing:
            raise FormatError(
                "CSV format invalid. Required columns: date, category, amount "
                f"(missing: {', '.join(missing)})"
            )
        
        date_idx = header.index("date")
        category_idx = header.index("category")
        amount_idx = header.index("amount")
        needed = max(date_idx, category_idx, amount_idx) + 1
        
        records = []
        skipped = 0
        for row in rows:
            row = [cell.strip() for cell in row]
            if len(row) < 3 or len(row) < needed:
                logger.debug(f"Skipping short row at line {rows.line_num}: {row}")
                skipped += 1
                continue
            
            amount = self._parse_amount(row[amount_idx])
            if amount is None:
                logger.debug(f"Skipping row with invalid amount at line {rows.line_num}: {row[amount_idx]!r}")
                skipped += 1
                continue
            
            records.append(TransactionRecord(
                date=row[date_idx],
                category=row[category_idx],
                amount=amount
            ))
        
        logger.info(f"Parsed {len(records)} transactions ({skipped} rows skipped)")
        return records
    
    @staticmethod
    def _parse_amount(value: str) -> Optional[Decimal]:
        """Parse a decimal amount, None when invalid, non-finite or out of range."""
        try:
            amount = Decimal(value)
        except InvalidOperation:
            return None
        if not amount.is_finite():
            return None
        
        # Exponents outside the decimal context overflow in later arithmetic
        context = getcontext()
        if amount and not context.Emin <= amount.adjusted() <= context.Emax:
            return None
        return amount
