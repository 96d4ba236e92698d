"""Grouping of commands and flags into named categories for help output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


def _is_visible(flag) -> bool:
    check = getattr(flag, "is_visible", None)
    return bool(check()) if callable(check) else False


def _category_of(flag):
    return getattr(flag, "category", None)


@dataclass(eq=False)
class CommandCategory:
    """A named group of commands."""

    name: str
    commands: list = field(default_factory=list)

    def visible_commands(self):
        """Return the commands that are not hidden."""
        return [command for command in self.commands if not command.hidden]


class CommandCategories:
    """Command categories in the order they were first seen."""

    def __init__(self):
        self._categories: list[CommandCategory] = []

    def add_command(self, category, command):
        """Add a command to a category, creating the category if needed."""
        for existing in self._categories:
            if existing.name == category:
                existing.commands.append(command)
                return
        self._categories.append(CommandCategory(category, [command]))

    def categories(self):
        """Return the categories as a new list."""
        return list(self._categories)

    def __len__(self):
        return len(self._categories)

    def __iter__(self) -> Iterator[CommandCategory]:
        return iter(self._categories)


class VisibleFlagCategory:
    """A named group of flags, keyed by their help text."""

    def __init__(self, name):
        self.name = name
        self._flags: dict[str, Any] = {}

    def _add(self, flag):
        self._flags[str(flag)] = flag

    def flags(self):
        """Return the visible flags sorted by their help text."""
        return [self._flags[key] for key in sorted(self._flags) if _is_visible(self._flags[key])]


class FlagCategories:
    """Flag categories sorted by name when listed."""

    def __init__(self):
        self._categories: dict[str, VisibleFlagCategory] = {}

    def add_flag(self, category, flag):
        """Add a flag to a category, creating the category if needed."""
        self._categories.setdefault(category, VisibleFlagCategory(category))._add(flag)

    def visible_categories(self):
        """Return the categories sorted by name."""
        return [self._categories[name] for name in sorted(self._categories)]


def flag_categories_from_flags(flags):
    """Build categories from flags; uncategorized flags go under "" only if some are categorized."""
    result = FlagCategories()
    flags = list(flags)
    categorized = False

    for flag in flags:
        category = _category_of(flag)
        if category is not None and category != "" and _is_visible(flag):
            result.add_flag(category, flag)
            categorized = True

    if categorized:
        for flag in flags:
            if _category_of(flag) == "" and _is_visible(flag):
                result.add_flag("", flag)

    return result