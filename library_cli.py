#!/usr/bin/env python3
"""
library_cli.py

Interactive menu for browsing, borrowing and returning books.

Typical usage:
    python library_cli.py --data-file library_data.csv

The catalog is loaded once at startup and written back after every
successful borrow or return.
"""

from __future__ import annotations
import argparse
import logging
from typing import List, Optional

import pandas as pd

from catalog_storage import DEFAULT_DATA_FILE, CatalogSaveError, CatalogStorage
from library_catalog import Catalog, CatalogError

logger = logging.getLogger("LibraryCatalog.cli")

SELECT_PROMPT = "\nEnter # or ID (or press Enter to cancel): "


# ---------------- Input / output helpers ----------------
def input_prompt(prompt: str) -> Optional[str]:
    """
    Wrapper around built-in input() that returns a stripped string.

    Returns None on EOF/KeyboardInterrupt so callers can stop the session.
    """
    try:
        return input(prompt).strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return None


def print_book_table(catalog: Catalog, titles: List[str],
                     show_available: bool = False, show_borrowed: bool = False) -> None:
    """Print the given titles as a numbered table, in the order given."""
    if not titles:
        print("No books to display.")
        return
    rows = []
    for pos, title in enumerate(titles, start=1):
        book = catalog.get_book(title)
        row = {"#": pos, "ID": book["Book ID"], "Title": book["Title"], "Author": book["Author"]}
        if show_available:
            row["Available"] = book["Available Copies"]
        if show_borrowed:
            row["Borrowed"] = book["Borrowed Copies"]
        rows.append(row)
    print(pd.DataFrame(rows).to_string(index=False))


def select_book(catalog: Catalog, titles: List[str], prompt: str = SELECT_PROMPT) -> Optional[str]:
    """
    Ask the user to pick one of `titles` by row number or book ID.

    Returns the chosen title, or None when the user cancels or the choice is invalid.
    """
    choice = input_prompt(prompt)
    if not choice or choice.lower() == "q":
        return None

    if choice.isascii() and choice.isdigit():
        num = int(choice)
        if 1 <= num <= len(titles):
            return titles[num - 1]
        print("Invalid selection.")
        return None

    book = catalog.find_by_id(choice)
    if book is not None and book["Title"] in titles:
        return book["Title"]
    print("Book not found.")
    return None


def persist(catalog: Catalog, storage: CatalogStorage) -> None:
    """Save after a mutation; report a failed write to the user instead of stopping."""
    try:
        storage.save(catalog)
    except CatalogSaveError as exc:
        print(f"Warning: could not save data: {exc}")


# ---------------- Commands ----------------
def view_available(catalog: Catalog) -> None:
    print("\nAvailable books:")
    print_book_table(catalog, [title for title, _ in catalog.list_available()], show_available=True)


def view_borrowed(catalog: Catalog) -> None:
    print("\nCurrently borrowed books:")
    print_book_table(catalog, [title for title, _ in catalog.list_borrowed()], show_borrowed=True)


def borrow_command(catalog: Catalog, storage: CatalogStorage) -> None:
    titles = [title for title, _ in catalog.list_available()]
    if not titles:
        print("\nNo books are currently available to borrow.")
        return

    print("\nSelect a book to borrow:")
    print_book_table(catalog, titles, show_available=True)
    title = select_book(catalog, titles)
    if title is None:
        return
    try:
        book = catalog.borrow(title)
    except CatalogError as exc:
        print(exc)
        return
    persist(catalog, storage)
    print(f'You borrowed "{book["Title"]}".')


def return_command(catalog: Catalog, storage: CatalogStorage) -> None:
    titles = [title for title, _ in catalog.list_borrowed()]
    if not titles:
        print("\nYou have no borrowed books to return.")
        return

    print("\nSelect a book to return:")
    print_book_table(catalog, titles, show_borrowed=True)
    title = select_book(catalog, titles)
    if title is None:
        return
    try:
        book = catalog.return_book(title)
    except CatalogError as exc:
        print(exc)
        return
    persist(catalog, storage)
    print(f'Thank you for returning "{book["Title"]}".')


# ---------------- CLI ----------------
def print_menu() -> None:
    print("\nLibrary Menu")
    print("1) View available books")
    print("2) View borrowed books")
    print("3) Borrow a book")
    print("4) Return a book")
    print("5) Exit")


def cli_loop(catalog: Catalog, storage: CatalogStorage) -> None:
    """
    Interactive command-loop.

    Presents the menu, reads a choice and runs the matching command until the
    user exits or input ends.
    """
    while True:
        print_menu()
        choice = input_prompt("Choose an option: ")
        if choice is None:
            print("Input error. Exiting.")
            break
        if choice == "1":
            view_available(catalog)
        elif choice == "2":
            view_borrowed(catalog)
        elif choice == "3":
            borrow_command(catalog, storage)
        elif choice == "4":
            return_command(catalog, storage)
        elif choice == "5":
            print("Goodbye!")
            break
        else:
            print("Please choose a valid option (1-5).")

        input_prompt("\nPress Enter to continue...")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Borrow and return books from a small local catalog")
    parser.add_argument("--data-file", default=str(DEFAULT_DATA_FILE),
                        help="CSV file holding the catalog (created with defaults if missing)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s: %(message)s")

    storage = CatalogStorage(args.data_file)
    catalog = storage.load()
    logger.info("Starting session with %d books from %s", len(catalog), storage.data_file)
    cli_loop(catalog, storage)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
