"""
Bookshelf sample application showcasing mgm documents and transactions.
"""

from .demo import bootstrap_connection, restock_shelf, run_demo, seed_books
from .models import Book

__all__ = [
    "Book",
    "bootstrap_connection",
    "seed_books",
    "restock_shelf",
    "run_demo",
]
