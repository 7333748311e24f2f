import pytest

from smart_library.errors import InvalidStateError, InvariantViolation, NotFoundError, ValidationError


def test_add_book_starts_with_all_copies_available(services):
    b = services.catalog.add_book({
        "title": "Deep Work", "author": "Cal Newport", "category": "Productivity", "price": "349.50",
    })
    assert b.id is not None
    assert b.total_copies == 3
    assert b.available_copies == 3
    assert float(b.price) == 349.50


def test_add_book_ignores_caller_copy_counts(services):
    b = services.catalog.add_book({
        "title": "X", "author": "Y", "category": "Z", "price": 10,
        "total_copies": 10, "available_copies": 7,
    })
    assert (b.total_copies, b.available_copies) == (3, 3)


@pytest.mark.parametrize("missing", ["title", "author", "category", "price"])
def test_add_book_requires_fields(services, missing):
    data = {"title": "T", "author": "A", "category": "C", "price": 100}
    data.pop(missing)
    with pytest.raises(ValidationError):
        services.catalog.add_book(data)


@pytest.mark.parametrize("price", [0, -5, "abc", "", None])
def test_add_book_rejects_bad_price(services, price):
    with pytest.raises(ValidationError):
        services.catalog.add_book({"title": "T", "author": "A", "category": "C", "price": price})


def test_get_book_unknown(services):
    with pytest.raises(NotFoundError):
        services.catalog.get_book(999)


def test_decrement_and_increment(services, book):
    services.catalog.decrement_availability(book.id)
    assert services.catalog.get_book(book.id).available_copies == 2
    services.catalog.increment_availability(book.id)
    assert services.catalog.get_book(book.id).available_copies == 3


def test_decrement_below_zero_is_invariant_violation(services, book):
    for _ in range(3):
        services.catalog.decrement_availability(book.id)
    with pytest.raises(InvariantViolation):
        services.catalog.decrement_availability(book.id)
    assert services.catalog.get_book(book.id).available_copies == 0


def test_increment_above_total_is_invariant_violation(services, book):
    with pytest.raises(InvariantViolation):
        services.catalog.increment_availability(book.id)


def test_availability_ops_unknown_book(services):
    with pytest.raises(NotFoundError):
        services.catalog.decrement_availability(42)
    with pytest.raises(NotFoundError):
        services.catalog.increment_availability(42)


def test_update_book_fields(services, book):
    b = services.catalog.update_book(book.id, {"title": "Atomic Habits (2nd ed.)", "price": 650, "is_popular": True})
    assert b.title == "Atomic Habits (2nd ed.)"
    assert float(b.price) == 650
    assert b.is_popular is True


def test_update_total_copies_keeps_borrowed_count(services, book):
    services.catalog.decrement_availability(book.id)
    b = services.catalog.update_book(book.id, {"total_copies": 5})
    assert (b.total_copies, b.available_copies) == (5, 4)


def test_update_total_copies_below_borrowed_rejected(services, book):
    services.catalog.decrement_availability(book.id)
    services.catalog.decrement_availability(book.id)
    with pytest.raises(ValidationError):
        services.catalog.update_book(book.id, {"total_copies": 1})
    b = services.catalog.get_book(book.id)
    assert (b.total_copies, b.available_copies) == (3, 1)


def test_update_rejects_blank_title(services, book):
    with pytest.raises(ValidationError):
        services.catalog.update_book(book.id, {"title": "  "})
    assert services.catalog.get_book(book.id).title == "Atomic Habits"


def test_delete_book(services, book):
    services.catalog.delete_book(book.id)
    with pytest.raises(NotFoundError):
        services.catalog.get_book(book.id)


def test_delete_book_with_active_borrowing_refused(services, book, member):
    services.transactions.borrow_book(book.id, member.id)
    with pytest.raises(InvalidStateError):
        services.catalog.delete_book(book.id)


def test_list_filters(services, book):
    services.catalog.add_book({"title": "Rich Dad", "author": "RK", "category": "Finance",
                               "price": 400, "is_recent": True})
    assert [b.title for b in services.catalog.list_books(category="Finance")] == ["Rich Dad"]
    assert [b.title for b in services.catalog.list_books(recent=True)] == ["Rich Dad"]
    assert len(services.catalog.list_books()) == 2

    for _ in range(3):
        services.catalog.decrement_availability(book.id)
    assert [b.title for b in services.catalog.available_books()] == ["Rich Dad"]


def test_catalog_and_engine_share_locks(services):
    assert services.catalog.locks is services.transactions.locks


def test_update_total_copies_after_borrow_keeps_counts(services, book, member):
    tx = services.transactions.borrow_book(book.id, member.id)
    b = services.catalog.update_book(book.id, {"total_copies": 5})
    assert (b.total_copies, b.available_copies) == (5, 4)

    services.transactions.return_book(tx.id)
    assert services.catalog.get_book(book.id).available_copies == 5
    assert len(services.catalog.locks) == 0


def test_update_below_borrowed_rolls_back(services, book, member):
    services.transactions.borrow_book(book.id, member.id)
    with pytest.raises(ValidationError):
        services.catalog.update_book(book.id, {"title": "Renamed", "total_copies": 0})
    b = services.catalog.get_book(book.id)
    assert b.title == "Atomic Habits"
    assert (b.total_copies, b.available_copies) == (3, 2)


def test_update_and_delete_unknown_book(services):
    with pytest.raises(NotFoundError):
        services.catalog.update_book(999, {"title": "X"})
    with pytest.raises(NotFoundError):
        services.catalog.delete_book(999)
    assert len(services.catalog.locks) == 0
