"""
Data models for the mgm bookshelf example.
"""

from __future__ import annotations

from mgm import DefaultModel, HookFailure, IntegerField, StringField


class InvalidBook(HookFailure):
    pass


class Book(DefaultModel):
    name = StringField(nullable=False, max_length=200)
    pages = IntegerField(default=0)

    def saving(self) -> None:
        if self.pages < 0:
            raise InvalidBook(f"'{self.name}' cannot have a negative page count")
        super().saving()
