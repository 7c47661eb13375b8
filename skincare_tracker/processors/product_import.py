"""Product import processor for product CSV files."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from ..db.session import SessionManager
from ..forms import validate_fields
from ..inventory.dates import to_iso
from ..inventory.product import ProductType
from ..store import build_row, has_duplicate
from .base import BaseProcessor
from .error_tracker import ErrorTracker

TAG_SEPARATOR = ';'

class ProductImportProcessor(BaseProcessor):
    """Create products from a CSV export of a product list.

    Rows that match an existing product (same brand, name and expiration
    date) or an earlier row of the same file are skipped, so re-running an
    import is harmless.
    """

    # Accepted headers for each field, first match wins
    field_mappings = {
        'brand': ['Brand', 'brand'],
        'name': ['Name', 'Product Name', 'name'],
        'type': ['Type', 'Product Type', 'type'],
        'date_opened': ['Date Opened', 'date_opened'],
        'date_finished': ['Date Finished', 'date_finished'],
        'expiration_date': ['Expiration Date', 'expiration_date'],
        'price': ['Price', 'price'],
        'notes': ['Notes', 'notes'],
        'tags': ['Tags', 'tags'],
    }

    required_fields = ['brand', 'name', 'type', 'expiration_date']

    def __init__(
        self,
        session_manager: SessionManager,
        batch_size: int = 100,
        error_limit: int = 1000,
        debug: bool = False
    ):
        super().__init__(session_manager, batch_size, error_limit, debug)
        self.error_tracker = ErrorTracker()
        self.processed_keys: Set[Tuple[str, str, Optional[str]]] = set()
        self.created_ids: List[str] = []

        self.stats.total_products = 0
        self.stats.created = 0
        self.stats.skipped = 0
        self.stats.validation_errors = 0

    def map_headers(self, columns) -> Dict[str, str]:
        """Map our field names to the CSV headers present."""
        header_mapping = {}
        for std_field, possible_names in self.field_mappings.items():
            for name in possible_names:
                if name in columns:
                    header_mapping[std_field] = name
                    break
        return header_mapping

    def validate_data(self, df: pd.DataFrame) -> Tuple[List[str], List[str]]:
        """Check the frame before any row is written.

        Missing required columns are critical. Blank required cells and
        unknown product types are warnings; those rows fail validation
        individually later.
        """
        critical_issues = []
        warnings = []

        header_mapping = self.map_headers(df.columns)
        missing = [
            self.field_mappings[name][0]
            for name in self.required_fields
            if name not in header_mapping
        ]
        if missing:
            critical_issues.append(f"Missing required columns: {', '.join(missing)}")
            return critical_issues, warnings

        for name in self.required_fields:
            column = header_mapping[name]
            blank = df[df[column].isna() | (df[column].astype(str).str.strip() == '')]
            if not blank.empty:
                warnings.append(
                    f"Found {len(blank)} rows with missing {column} that will be skipped. "
                    f"First few row numbers: {', '.join(str(i + 2) for i in blank.index[:3])}"
                )

        types = df[header_mapping['type']].dropna().astype(str).str.strip()
        unknown_types = sorted(set(types[(types != '') & ~types.isin(ProductType.values())]))
        if unknown_types:
            warnings.append(f"Unknown product types will be skipped: {', '.join(unknown_types[:3])}")

        return critical_issues, warnings

    def _cell(self, row: pd.Series, header_mapping: Dict[str, str], field: str) -> Optional[str]:
        column = header_mapping.get(field)
        if column is None:
            return None
        value = row[column]
        if pd.isna(value):
            return None
        value = str(value).strip()
        return value or None

    def row_to_fields(self, row: pd.Series, header_mapping: Dict[str, str]) -> Dict[str, Any]:
        """Build store fields from one CSV row."""
        fields = {
            name: self._cell(row, header_mapping, name)
            for name in self.field_mappings
            if name in header_mapping
        }

        raw_tags = fields.pop('tags', None)
        fields['tags'] = [tag.strip() for tag in raw_tags.split(TAG_SEPARATOR) if tag.strip()] if raw_tags else []

        price = fields.get('price')
        if price is not None:
            try:
                fields['price'] = float(price.lstrip('$'))
            except ValueError:
                # Left as text so validation reports it
                pass

        return fields

    def _process_batch(self, session: Session, batch_df: pd.DataFrame) -> pd.DataFrame:
        header_mapping = self.map_headers(batch_df.columns)
        outcomes = []
        product_ids = []

        for idx, row in batch_df.iterrows():
            row_number = idx + 2  # header is line 1
            fields = self.row_to_fields(row, header_mapping)
            self.stats.total_products += 1

            errors = validate_fields(fields)
            if errors:
                self.stats.validation_errors += 1
                for error in errors:
                    self.error_tracker.add_error('validation', str(error), {'row': row_number})
                if self.debug:
                    self.logger.debug(f"Row {row_number} failed validation: {errors}")
                outcomes.append('invalid')
                product_ids.append(None)
                continue

            key = (fields['brand'], fields['name'], to_iso(fields['expiration_date']))
            if key in self.processed_keys or has_duplicate(session, *key):
                self.stats.skipped += 1
                outcomes.append('skipped')
                product_ids.append(None)
                continue
            self.processed_keys.add(key)

            product = build_row(fields)
            session.add(product)
            self.stats.created += 1
            self.created_ids.append(product.id)
            outcomes.append('created')
            product_ids.append(product.id)

        batch_df['outcome'] = outcomes
        batch_df['product_id'] = product_ids
        return batch_df

    def process_file(self, input_file: Path) -> Dict[str, Any]:
        """Read a CSV file and import it.

        Returns:
            Dictionary with the stats, error summary and created ids
        """
        self.logger.info(f"Reading {input_file}")
        df = pd.read_csv(input_file, dtype=str, skipinitialspace=True)
        self.process(df)

        stats = self.get_stats()
        stats['total_errors'] += self.error_tracker.total
        self.error_tracker.log_summary(self.logger)

        return {
            'summary': {
                'stats': stats,
                'errors': self.error_tracker.get_summary()
            },
            'created_ids': list(self.created_ids)
        }
