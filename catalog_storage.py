#!/usr/bin/env python3
"""
catalog_storage.py

Reads and writes the catalog as a CSV file.

`parse_catalog` is a pure bytes -> Catalog conversion that raises on bad input;
`CatalogStorage.load` wraps it with the healing policy (missing or corrupted
file -> default catalog, written back to disk).
"""

from __future__ import annotations
import io
import logging
import pathlib
from typing import Union

import pandas as pd

from library_catalog import (
    BOOK_COLUMNS,
    Catalog,
    CatalogError,
    InvalidCatalogError,
    default_catalog,
)

# Configuration
DEFAULT_DATA_FILE = pathlib.Path("library_data.csv")

logger = logging.getLogger("LibraryCatalog.storage")


class CatalogParseError(CatalogError):
    """Stored bytes do not describe a valid catalog."""


class CatalogSaveError(CatalogError):
    """The catalog could not be written to disk."""


def parse_catalog(data: bytes) -> Catalog:
    """
    Turn the raw contents of a catalog file into a Catalog.

    All columns are read as text so titles such as "1984" or "007" survive
    untouched; counts are converted during validation.

    Raises:
        CatalogParseError: the bytes are not CSV, or the rows break a catalog rule.
    """
    try:
        df = pd.read_csv(io.BytesIO(data), dtype=str, keep_default_na=False, encoding="utf-8")
    except (pd.errors.EmptyDataError, pd.errors.ParserError, ValueError) as exc:
        raise CatalogParseError(f"Unreadable catalog data: {exc}") from exc
    try:
        return Catalog(df)
    except InvalidCatalogError as exc:
        raise CatalogParseError(str(exc)) from exc


def serialize_catalog(catalog: Catalog) -> str:
    """Render the catalog as the CSV text written by `CatalogStorage.save`."""
    return catalog.books_df.to_csv(index=False, columns=BOOK_COLUMNS, lineterminator="\n")


class CatalogStorage:
    """CatalogStorage binds load/save of a catalog to one CSV file."""

    def __init__(self, data_file: Union[str, pathlib.Path] = DEFAULT_DATA_FILE):
        self.data_file = pathlib.Path(data_file)

    # ---------------- Loading ----------------
    def load(self) -> Catalog:
        """
        Load the catalog from `data_file`.

        Never raises. A missing or corrupted file is replaced by the default
        catalog; a file that exists but cannot be read falls back to the
        default catalog and is left alone.
        """
        if not self.data_file.exists():
            logger.warning("Catalog file not found: %s (creating default catalog)", self.data_file)
            return self._heal()

        try:
            data = self.data_file.read_bytes()
        except OSError as exc:
            logger.warning("Could not read catalog file %s (%s). Using default catalog.", self.data_file, exc)
            return default_catalog()

        try:
            catalog = parse_catalog(data)
        except CatalogParseError as exc:
            logger.warning("Catalog file %s is corrupted (%s). Resetting to defaults.", self.data_file, exc)
            return self._heal()

        logger.info("Loaded %d books from %s", len(catalog), self.data_file)
        return catalog

    def _heal(self) -> Catalog:
        catalog = default_catalog()
        try:
            self.save(catalog)
        except CatalogSaveError as exc:
            logger.warning("Failed to write default catalog: %s", exc)
        return catalog

    # ---------------- Persisting ----------------
    def save(self, catalog: Catalog) -> None:
        """
        Overwrite `data_file` with the given catalog.

        Raises:
            CatalogSaveError: the directory or file could not be written.
        """
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            self.data_file.write_text(serialize_catalog(catalog), encoding="utf-8")
        except OSError as exc:
            logger.error("Could not save catalog to %s: %s", self.data_file, exc)
            raise CatalogSaveError(f"could not write {self.data_file}: {exc}") from exc
        logger.info("Saved %d books to %s", len(catalog), self.data_file)
