#!/usr/bin/env python3
"""
library_catalog.py

In-memory book catalog with borrow/return bookkeeping.

The catalog is a pandas DataFrame with one row per title. Every row tracks how
many copies the library owns and how many are currently out; the number of
available copies is derived from those two counts.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

logger = logging.getLogger("LibraryCatalog")

# Configuration
TEXT_COLUMNS = ["Book ID", "Title", "Author"]
COUNT_COLUMNS = ["Total Copies", "Borrowed Copies"]
BOOK_COLUMNS = TEXT_COLUMNS + COUNT_COLUMNS
# counts are stored as int64
COUNT_LIMIT = 2 ** 63

# (Book ID, Title, Author, Total Copies)
DEFAULT_BOOKS = [
    ("B001", "1984", "George Orwell", 3),
    ("B002", "Pride and Prejudice", "Jane Austen", 2),
    ("B003", "To Kill a Mockingbird", "Harper Lee", 4),
    ("B004", "The Great Gatsby", "F. Scott Fitzgerald", 2),
    ("B005", "The Hobbit", "J.R.R. Tolkien", 2),
]


# ---------------- Errors ----------------
class CatalogError(Exception):
    """Base exception for catalog errors."""


class InvalidCatalogError(CatalogError):
    """Book rows break the catalog rules (missing column, duplicate title, bad counts...)."""


class BookNotFoundError(CatalogError):
    """No book carries the requested title."""

    def __init__(self, title: str):
        super().__init__(f"Book not found: {title}")
        self.title = title


class NoCopiesAvailableError(CatalogError):
    """Every copy of the title is already borrowed."""

    def __init__(self, title: str):
        super().__init__(f"No copies of '{title}' left to borrow.")
        self.title = title


class NothingToReturnError(CatalogError):
    """All copies of the title are already in the library."""

    def __init__(self, title: str):
        super().__init__(f"All copies of '{title}' are already in the library.")
        self.title = title


# ---------------- Validation ----------------
def validate_books_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize raw book rows and check them against the catalog rules.

    Text columns are coerced to str and count columns to int64. The returned
    frame has exactly BOOK_COLUMNS, in that order, with a fresh RangeIndex.

    Raises:
        InvalidCatalogError: when a column is missing, the catalog is empty,
            a title or ID is blank or duplicated, or a count is not a whole
            number in the range 0 <= borrowed <= total.
    """
    missing = [c for c in BOOK_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidCatalogError(f"Missing columns: {', '.join(missing)}")
    if df.empty:
        raise InvalidCatalogError("Catalog must contain at least one book")

    out = df[BOOK_COLUMNS].copy().reset_index(drop=True)
    for col in TEXT_COLUMNS:
        out[col] = out[col].fillna("").astype(str)

    if (out["Title"] == "").any():
        raise InvalidCatalogError("Every book needs a title")
    if (out["Book ID"].str.strip() == "").any():
        raise InvalidCatalogError("Every book needs an ID")

    dup_titles = out.loc[out["Title"].duplicated(), "Title"]
    if not dup_titles.empty:
        raise InvalidCatalogError(f"Duplicate title: {dup_titles.iloc[0]!r}")
    dup_ids = out.loc[out["Book ID"].str.strip().str.lower().duplicated(), "Book ID"]
    if not dup_ids.empty:
        raise InvalidCatalogError(f"Duplicate book ID: {dup_ids.iloc[0]!r}")

    for col in COUNT_COLUMNS:
        values = pd.to_numeric(out[col], errors="coerce")
        if values.isna().any() or (values % 1 != 0).any():
            raise InvalidCatalogError(f"'{col}' must hold whole numbers")
        if (values < 0).any():
            raise InvalidCatalogError(f"'{col}' cannot be negative")
        if (values >= COUNT_LIMIT).any():
            raise InvalidCatalogError(f"'{col}' is too large")
        out[col] = values.astype("int64")

    over = out.loc[out["Borrowed Copies"] > out["Total Copies"], "Title"]
    if not over.empty:
        raise InvalidCatalogError(f"More copies borrowed than owned for {over.iloc[0]!r}")
    return out


class Catalog:
    """
    Catalog keeps the library's books in catalog order and enforces the borrow/return rules.

    The backing DataFrame (`books_df`) has the columns in BOOK_COLUMNS. All checks run
    before a count is touched, so a failed borrow or return leaves the catalog as it was.
    """

    def __init__(self, books_df: pd.DataFrame):
        """
        Args:
            books_df: raw book rows; validated and normalized with `validate_books_frame`.
        """
        self.books_df = validate_books_frame(books_df)

    @classmethod
    def from_records(cls, records: Iterable[Dict]) -> Catalog:
        """Build a catalog from dicts keyed by BOOK_COLUMNS."""
        return cls(pd.DataFrame(list(records), columns=BOOK_COLUMNS))

    def __len__(self) -> int:
        return len(self.books_df)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return self.records() == other.records()

    def __repr__(self) -> str:
        return f"Catalog({self.records()!r})"

    # -------------- Internal helpers ----------------
    def _locate(self, title: str) -> Optional[int]:
        mask = self.books_df["Title"] == title
        if not mask.any():
            return None
        return int(self.books_df.index[mask][0])

    def _record(self, idx: int) -> Dict:
        row = self.books_df.loc[idx]
        total = int(row["Total Copies"])
        borrowed = int(row["Borrowed Copies"])
        return {
            "Book ID": str(row["Book ID"]),
            "Title": str(row["Title"]),
            "Author": str(row["Author"]),
            "Total Copies": total,
            "Borrowed Copies": borrowed,
            "Available Copies": total - borrowed,
        }

    # ---------------- Queries ----------------
    def records(self) -> List[Dict]:
        """Return every book as a record dict, in catalog order."""
        return [self._record(idx) for idx in self.books_df.index]

    def titles(self) -> List[str]:
        return self.books_df["Title"].tolist()

    def get_book(self, title: str) -> Optional[Dict]:
        """
        Retrieve a single book record by exact (case-sensitive) title.

        Returns a record dict or None if not found.
        """
        idx = self._locate(title)
        return None if idx is None else self._record(idx)

    def find_by_id(self, book_id: str) -> Optional[Dict]:
        """Look a book up by ID, ignoring case and surrounding whitespace."""
        wanted = (book_id or "").strip().lower()
        mask = self.books_df["Book ID"].str.strip().str.lower() == wanted
        if not wanted or not mask.any():
            return None
        return self._record(int(self.books_df.index[mask][0]))

    def list_available(self) -> List[Tuple[str, int]]:
        """(title, available copies) for every book with at least one copy on the shelf."""
        available = self.books_df["Total Copies"] - self.books_df["Borrowed Copies"]
        rows = self.books_df.loc[available > 0, "Title"]
        return [(title, int(available[idx])) for idx, title in rows.items()]

    def list_borrowed(self) -> List[Tuple[str, int]]:
        """(title, borrowed copies) for every book with at least one copy out."""
        borrowed = self.books_df["Borrowed Copies"]
        rows = self.books_df.loc[borrowed > 0, "Title"]
        return [(title, int(borrowed[idx])) for idx, title in rows.items()]

    # ---------------- Core operations ----------------
    def borrow(self, title: str) -> Dict:
        """
        Lend one copy of `title`.

        Returns the updated record.

        Raises:
            BookNotFoundError: no book has exactly this title.
            NoCopiesAvailableError: every copy is already out.
        """
        idx = self._locate(title)
        if idx is None:
            raise BookNotFoundError(title)
        record = self._record(idx)
        if record["Available Copies"] == 0:
            raise NoCopiesAvailableError(title)

        self.books_df.at[idx, "Borrowed Copies"] = record["Borrowed Copies"] + 1
        record = self._record(idx)
        logger.info("Borrowed '%s' (%d of %d copies out)", title,
                    record["Borrowed Copies"], record["Total Copies"])
        return record

    def return_book(self, title: str) -> Dict:
        """
        Take one copy of `title` back.

        Returns the updated record.

        Raises:
            BookNotFoundError: no book has exactly this title.
            NothingToReturnError: no copy is currently out.
        """
        idx = self._locate(title)
        if idx is None:
            raise BookNotFoundError(title)
        record = self._record(idx)
        if record["Borrowed Copies"] == 0:
            raise NothingToReturnError(title)

        self.books_df.at[idx, "Borrowed Copies"] = record["Borrowed Copies"] - 1
        record = self._record(idx)
        logger.info("Returned '%s' (%d of %d copies out)", title,
                    record["Borrowed Copies"], record["Total Copies"])
        return record


def default_catalog() -> Catalog:
    """Fresh starter catalog built from DEFAULT_BOOKS, nothing borrowed."""
    return Catalog.from_records(
        {"Book ID": book_id, "Title": title, "Author": author,
         "Total Copies": total, "Borrowed Copies": 0}
        for book_id, title, author, total in DEFAULT_BOOKS
    )
