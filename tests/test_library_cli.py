import pytest

import library_cli
from catalog_storage import CatalogStorage
from library_catalog import default_catalog


@pytest.fixture
def feed_input(monkeypatch):
    """Replace input() with a scripted sequence; EOF once it runs out."""

    def _feed(answers):
        remaining = list(answers)

        def fake_input(prompt=""):
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)

    return _feed


@pytest.fixture
def storage(tmp_path):
    return CatalogStorage(tmp_path / "library_data.csv")


def test_borrow_by_row_number_is_saved(feed_input, storage, capsys):
    catalog = storage.load()
    feed_input(["3", "5", "", "5"])

    library_cli.cli_loop(catalog, storage)

    out = capsys.readouterr().out
    assert 'You borrowed "The Hobbit".' in out
    assert "Goodbye!" in out
    assert storage.load().list_borrowed() == [("The Hobbit", 1)]


def test_borrow_by_id_ignores_case(feed_input, storage, capsys):
    catalog = storage.load()
    feed_input(["3", "b002", "", "5"])

    library_cli.cli_loop(catalog, storage)

    assert 'You borrowed "Pride and Prejudice".' in capsys.readouterr().out
    assert catalog.list_borrowed() == [("Pride and Prejudice", 1)]


def test_return_flow(feed_input, storage, capsys):
    catalog = storage.load()
    catalog.borrow("1984")
    storage.save(catalog)
    feed_input(["2", "", "4", "1", "", "5"])

    library_cli.cli_loop(catalog, storage)

    out = capsys.readouterr().out
    assert "Currently borrowed books:" in out
    assert 'Thank you for returning "1984".' in out
    assert storage.load() == default_catalog()


def test_return_with_nothing_borrowed(feed_input, storage, capsys):
    feed_input(["4", "", "5"])

    library_cli.cli_loop(default_catalog(), storage)

    assert "You have no borrowed books to return." in capsys.readouterr().out


def test_invalid_selection_and_cancel_change_nothing(feed_input, storage, capsys):
    catalog = default_catalog()
    feed_input(["3", "42", "", "3", "Z9", "", "3", "q", "", "5"])

    library_cli.cli_loop(catalog, storage)

    out = capsys.readouterr().out
    assert "Invalid selection." in out
    assert "Book not found." in out
    assert catalog == default_catalog()
    assert not storage.data_file.exists()


def test_unknown_option_and_end_of_input(feed_input, storage, capsys):
    feed_input(["9", ""])

    library_cli.cli_loop(default_catalog(), storage)

    out = capsys.readouterr().out
    assert "Please choose a valid option (1-5)." in out
    assert "Input error. Exiting." in out


def test_view_available_shows_table(capsys):
    library_cli.view_available(default_catalog())

    out = capsys.readouterr().out
    assert "Available" in out
    assert "To Kill a Mockingbird" in out
    assert "Harper Lee" in out


def test_view_borrowed_when_empty(capsys):
    library_cli.view_borrowed(default_catalog())

    assert "No books to display." in capsys.readouterr().out


def test_save_failure_is_reported_and_loop_continues(feed_input, tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    storage = CatalogStorage(blocker / "library_data.csv")
    catalog = default_catalog()
    feed_input(["3", "1", "", "5"])

    library_cli.cli_loop(catalog, storage)

    out = capsys.readouterr().out
    assert "Warning: could not save data:" in out
    assert "Goodbye!" in out
    assert catalog.list_borrowed() == [("1984", 1)]


def test_main_loads_and_creates_data_file(feed_input, tmp_path, capsys):
    data_file = tmp_path / "catalog.csv"
    feed_input(["1", "", "5"])

    assert library_cli.main(["--data-file", str(data_file)]) == 0

    assert data_file.exists()
    assert "The Hobbit" in capsys.readouterr().out


def test_non_ascii_digits_fall_back_to_id_lookup(feed_input, storage, capsys):
    catalog = default_catalog()
    feed_input(["3", "²", "", "3", "①", "", "5"])

    library_cli.cli_loop(catalog, storage)

    out = capsys.readouterr().out
    assert out.count("Book not found.") == 2
    assert "Goodbye!" in out
    assert catalog == default_catalog()
