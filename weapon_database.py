"""
Weapon Database

Parses the weapon CSV into weapon records and keeps them in an in-memory
store with load-once semantics. Also fetches the CSV from a URL or a
local file.
"""

import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Any, Sequence

import requests

from models import (
    WeaponRecord, CSV_COLUMN_MAP, MIN_WEAPON_COLUMNS,
    EFFECT_FIELDS, SUPPORT_FIELDS,
    LoadResult, LoadStatus, TransportError, WeaponParseError,
)
from csv_tokenizer import CsvTokenizer
from weapon_rules import ZERO_ATB_DISPLAY


SCRIPT_DIR = Path(__file__).parent

FILE_NAME = 'weaponData.csv'
WEAP_NUM_SKIP_LINE = 1
FETCH_TIMEOUT_SEC = 30

# Environment variable naming the data source (file path or http(s) URL)
DATA_SOURCE_ENV = 'WEAPON_DATA_SOURCE'


# =============================================================================
# ROW -> RECORD
# =============================================================================

class WeaponRecordBuilder:
    """
    Maps a CSV row onto a named-field weapon record.

    Rows shorter than `min_columns` are rejected. The `uses` column gets
    ZERO_ATB_DISPLAY when its raw value is 0.
    """

    def __init__(self, column_map: Optional[Dict[str, int]] = None,
                 min_columns: int = MIN_WEAPON_COLUMNS):
        self.column_map = column_map or CSV_COLUMN_MAP
        self.min_columns = min_columns

    def build(self, row: Sequence[Any], row_index: int) -> Optional[WeaponRecord]:
        """
        Build a weapon record from one row.

        Args:
            row: CSV row as a sequence of cells
            row_index: Row number, for error reporting

        Returns:
            The weapon record, or None if the row is invalid
        """
        if not isinstance(row, (list, tuple)) or len(row) == 0:
            print(f"Error: build: Invalid row at index {row_index}")
            return None

        if len(row) < self.min_columns:
            print(f"Warning: build: Row {row_index} has insufficient columns "
                  f"({len(row)}), skipping")
            return None

        try:
            record: WeaponRecord = {}
            for field_name, column in self.column_map.items():
                value = row[column]
                value = '' if value is None else str(value)
                if field_name == 'uses':
                    value = self._display_uses(value)
                record[field_name] = value
            return record

        except Exception as e:
            print(f"Error: build: Failed to parse row {row_index}: {e}")
            return None

    @staticmethod
    def _display_uses(value: str) -> str:
        """Replace a zero use count with the "no limit" display text."""
        try:
            if value.strip() and float(value) == 0:
                return ZERO_ATB_DISPLAY
        except ValueError:
            pass
        return value


def _is_blank_row(row: List[str]) -> bool:
    return len(row) == 1 and not row[0].strip()


def parse_weapon_csv(csv_content: str, skip_lines: int = WEAP_NUM_SKIP_LINE,
                     tokenizer: Optional[CsvTokenizer] = None,
                     builder: Optional[WeaponRecordBuilder] = None
                     ) -> Tuple[List[WeaponRecord], int]:
    """
    Parse CSV content into weapon records.

    Args:
        csv_content: Raw CSV file content
        skip_lines: Number of header rows to skip
        tokenizer: Tokenizer to use (comma-delimited by default)
        builder: Record builder to use

    Returns:
        (records, skipped_row_count)

    Raises:
        WeaponParseError: if the content is not text or has no rows
            past the header
    """
    if not isinstance(csv_content, str):
        raise WeaponParseError(
            f"Invalid CSV content: expected text, got {type(csv_content).__name__}")

    tokenizer = tokenizer or CsvTokenizer(',')
    builder = builder or WeaponRecordBuilder()

    rows = tokenizer.tokenize(csv_content)
    if len(rows) <= skip_lines:
        raise WeaponParseError(
            f"CSV has only {len(rows)} lines, expected more than {skip_lines}")

    weapons = []
    skipped = 0
    for row_index in range(skip_lines, len(rows)):
        row = rows[row_index]
        if _is_blank_row(row):
            continue

        record = builder.build(row, row_index)
        if record is None:
            skipped += 1
            continue
        weapons.append(record)

    print(f"parse_weapon_csv: Successfully parsed {len(weapons)} weapons"
          + (f" ({skipped} rows skipped)" if skipped else ""))
    return weapons, skipped


# =============================================================================
# STORE
# =============================================================================

class WeaponStore:
    """
    In-memory weapon records.

    Empty until the first successful load; after that the content never
    changes (later loads are no-ops) unless reset() is called.
    """

    def __init__(self, skip_lines: int = WEAP_NUM_SKIP_LINE, delimiter: str = ',',
                 builder: Optional[WeaponRecordBuilder] = None):
        self.skip_lines = skip_lines
        self.tokenizer = CsvTokenizer(delimiter)
        self.builder = builder or WeaponRecordBuilder()
        self._weapons: Tuple[WeaponRecord, ...] = ()
        self._loaded = False

    def load(self, source_text: str) -> LoadResult:
        """
        Populate the store from CSV text, once.

        Returns a LoadResult; parse failures are reported there and leave
        the store empty.
        """
        if self._loaded:
            return LoadResult(LoadStatus.ALREADY_LOADED, weapon_count=len(self._weapons))

        try:
            weapons, skipped = parse_weapon_csv(
                source_text, self.skip_lines, self.tokenizer, self.builder)
        except WeaponParseError as e:
            print(f"Error: load: {e}")
            return LoadResult(LoadStatus.PARSE_ERROR, message=str(e))

        if not weapons:
            message = f"No weapon rows could be parsed ({skipped} rows skipped)"
            print(f"Error: load: {message}")
            return LoadResult(LoadStatus.PARSE_ERROR, skipped_rows=skipped, message=message)

        self._weapons = tuple(weapons)
        self._loaded = True
        return LoadResult(
            LoadStatus.LOADED,
            weapon_count=len(weapons),
            skipped_rows=skipped,
            message=f"Loaded {len(weapons)} weapons",
        )

    def is_loaded(self) -> bool:
        return self._loaded

    def all(self) -> Tuple[WeaponRecord, ...]:
        """All weapon records in dataset order."""
        return self._weapons

    def reset(self):
        """Drop all records (tests only)."""
        self._weapons = ()
        self._loaded = False

    def __len__(self) -> int:
        return len(self._weapons)

    # -------------------------------------------------------------------------
    # Query primitives
    # -------------------------------------------------------------------------

    def get_field(self, record: WeaponRecord, field_name: str) -> str:
        """
        Get a field value from a record.

        Returns '' (with a warning) for unknown fields instead of raising,
        since callers iterate over many records.
        """
        if not record:
            print("Error: get_field: record is required")
            return ''
        if field_name not in record:
            print(f"Warning: get_field: Property \"{field_name}\" not found in item")
            return ''
        value = record[field_name]
        return '' if value is None else value

    def has_substring(self, record: WeaponRecord, field_name: str,
                      needle: Optional[str]) -> bool:
        """
        Case-sensitive substring test against a field.

        False for a missing needle, a missing field or a non-string value;
        an empty needle always matches.
        """
        if needle is None or not record:
            return False
        value = record.get(field_name)
        if not isinstance(value, str):
            return False
        return needle in value

    def field_equals(self, record: WeaponRecord, field_name: str, value: str) -> bool:
        """Exact match of a field against a value."""
        if not record:
            return False
        return record.get(field_name) == value

    def find_slot(self, record: WeaponRecord, field_names: Sequence[str],
                  needle: Optional[str]) -> Optional[int]:
        """
        First slot (1-based) whose field contains the needle.

        Slots are searched in the order given; None if no slot matches.
        """
        for slot, field_name in enumerate(field_names, start=1):
            if self.has_substring(record, field_name, needle):
                return slot
        return None

    def has_effect(self, record: WeaponRecord, text: str) -> bool:
        """True if any effect slot (1-3) contains the text."""
        return self.find_slot(record, EFFECT_FIELDS, text) is not None

    def has_materia(self, record: WeaponRecord, text: str) -> bool:
        """True if any support (materia) slot contains the text."""
        return self.find_slot(record, SUPPORT_FIELDS, text) is not None


# =============================================================================
# SOURCE LOADING
# =============================================================================

def is_url(source: str) -> bool:
    return source.startswith(('http://', 'https://'))


def build_source_url(url: str, timestamp_ms: Optional[int] = None) -> str:
    """Append a cache-busting timestamp parameter to a URL."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    separator = '&' if '?' in url else '?'
    return f"{url}{separator}t={timestamp_ms}"


def fetch_source_text(source: str, timeout: float = FETCH_TIMEOUT_SEC) -> str:
    """
    Fetch the weapon CSV as text.

    Args:
        source: http(s) URL or local file path
        timeout: Request timeout in seconds

    Raises:
        TransportError: on network failure, non-2xx status or unreadable file
    """
    if is_url(source):
        try:
            response = requests.get(build_source_url(source), timeout=timeout)
        except requests.RequestException as e:
            raise TransportError(f"Network error occurred: {e}") from e

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"Failed to load file: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        if 'charset' not in response.headers.get('content-type', '').lower():
            response.encoding = 'utf-8'
        return response.text

    try:
        return Path(source).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise TransportError(f"Failed to load file: {e}") from e


def load_from_source(store: WeaponStore, source: str) -> LoadResult:
    """
    Fetch the source and load it into the store.

    Skips the fetch entirely when the store is already populated.
    Transport failures come back as a TRANSPORT_ERROR result.
    """
    if store.is_loaded():
        return LoadResult(LoadStatus.ALREADY_LOADED, weapon_count=len(store))

    try:
        text = fetch_source_text(source)
    except TransportError as e:
        print(f"Error: Database load error: {e}")
        return LoadResult(LoadStatus.TRANSPORT_ERROR, message=str(e))

    return store.load(text)


def default_source() -> str:
    """Default weapon CSV location (next to this module)."""
    return str(SCRIPT_DIR / FILE_NAME)
