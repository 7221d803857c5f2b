"""
Result Mapping - Rebuild parent/child trees from flat join rows.

A join such as Books LEFT JOIN Authors returns one row per book/author
pair. The functions here fold those rows back into one Book per ISBN
with its authors collected, in the order the rows arrived.

Rows are split into segments by fixed widths (the "split boundaries"):
    (isbn, title, price, author_id, author_name)  with widths (3, 2)
    -> parent segment (isbn, title, price), child segment (author_id, author_name)

The identity column must be first in every segment. Nothing here checks
that the widths match the query: a wrong split silently groups wrongly.
"""
from typing import Any, Callable, Dict, Hashable, Iterable, List, Sequence, Tuple, TypeVar

from snippets.database.entities import Author, Book, Customer, Order

P = TypeVar("P")

# Column counts per segment, matching the SELECT lists in repository.py
BOOK_AUTHOR_SPLIT: Tuple[int, ...] = (3, 2)
ORDER_CUSTOMER_BOOK_SPLIT: Tuple[int, ...] = (2, 3, 2)


def split_row(row: Sequence[Any], widths: Sequence[int]) -> List[Tuple[Any, ...]]:
    """
    Cut ``row`` into consecutive segments of the given widths.

    Columns beyond the last width are ignored.

    Example:
        >>> split_row(("978-1", "Title", 9.5, 1, "Ann"), (3, 2))
        [('978-1', 'Title', 9.5), (1, 'Ann')]
    """
    values = tuple(row)
    segments = []
    start = 0
    for width in widths:
        segments.append(values[start:start + width])
        start += width
    return segments


def is_null_segment(fields: Sequence[Any]) -> bool:
    """True for the child side of an outer-join row that matched nothing."""
    return all(value is None for value in fields)


def reconstruct(
    rows: Iterable[Sequence[Any]],
    widths: Sequence[int],
    build_parent: Callable[[List[Tuple[Any, ...]]], P],
    attach: Callable[[P, List[Tuple[Any, ...]]], None],
) -> Dict[Hashable, P]:
    """
    Fold flat join rows into parents keyed by their first column.

    Args:
        rows: Flat result rows, consumed once
        widths: Segment widths; segment 0 is the parent
        build_parent: Builds a parent from the segments of its first row
        attach: Adds the child segments of a row to an existing parent

    Returns:
        Dict of parent key to parent, in first-seen order
    """
    parents: Dict[Hashable, P] = {}
    for row in rows:
        segments = split_row(row, widths)
        key = segments[0][0]

        parent = parents.get(key)
        if parent is None:
            parent = build_parent(segments)
            parents[key] = parent

        attach(parent, segments)
    return parents


def _attach_author(book: Book, segments: List[Tuple[Any, ...]]) -> None:
    author_fields = segments[1]
    if not is_null_segment(author_fields):
        book.authors.append(Author.from_row(author_fields))


def _build_order(segments: List[Tuple[Any, ...]]) -> Order:
    order = Order.from_row(segments[0])
    # Orders inner-join customers, so the customer segment is never empty
    order.customer = Customer.from_row(segments[1])
    return order


def _attach_book(order: Order, segments: List[Tuple[Any, ...]]) -> None:
    book_fields = segments[2]
    if not is_null_segment(book_fields):
        order.books.append(Book.from_row(book_fields))


def map_books(rows: Iterable[Sequence[Any]]) -> Dict[str, Book]:
    """
    Map (isbn, title, price, author_id, author_name) rows to books by ISBN.

    A book without authors (LEFT JOIN miss) is kept with an empty list.
    """
    return reconstruct(
        rows,
        BOOK_AUTHOR_SPLIT,
        build_parent=lambda segments: Book.from_row(segments[0]),
        attach=_attach_author,
    )


def map_orders(rows: Iterable[Sequence[Any]]) -> Dict[int, Order]:
    """
    Map (order_id, order_date, customer_id, name, email, isbn, title)
    rows to orders by id.

    Repeated book rows are kept; an order with no lines has no books.
    """
    return reconstruct(
        rows,
        ORDER_CUSTOMER_BOOK_SPLIT,
        build_parent=_build_order,
        attach=_attach_book,
    )
