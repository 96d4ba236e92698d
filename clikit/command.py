"""The command tree: sub-commands, flag lookup and positional argument access."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from clikit.args import (
    FloatArg,
    FloatArgs,
    IntArg,
    IntArgs,
    ParsedArgs,
    StringArg,
    StringArgs,
    TimestampArg,
    TimestampArgs,
    UintArg,
    UintArgs,
    parse_all,
)
from clikit.category import CommandCategories, flag_categories_from_flags
from clikit.tracing import tracef

HELP_NAME = "help"


class RequiredFlagsError(ValueError):
    """Raised when one or more required flags have not been set."""

    def __init__(self, missing_flags):
        self.missing_flags = list(missing_flags)
        if len(self.missing_flags) == 1:
            message = f'Required flag "{self.missing_flags[0]}" not set'
        else:
            message = f'Required flags "{", ".join(self.missing_flags)}" not set'
        super().__init__(message)


def _is_visible(flag) -> bool:
    check = getattr(flag, "is_visible", None)
    return bool(check()) if callable(check) else False


def _is_required(flag) -> bool:
    check = getattr(flag, "is_required", None)
    return bool(check()) if callable(check) else False


def _visible(flags) -> list:
    return [flag for flag in flags if _is_visible(flag)]


def _contains(items, item) -> bool:
    return any(existing is item for existing in items)


@dataclass(eq=False)
class Command:
    """A command with flags, positional arguments and sub-commands."""

    name: str = ""
    aliases: list = field(default_factory=list)
    usage: str = ""
    usage_text: str = ""
    args_usage: str = ""
    version: str = ""
    description: str = ""
    default_command: str = ""
    category: str = ""
    commands: list = field(default_factory=list)
    flags: list = field(default_factory=list)
    hide_help: bool = False
    hide_help_command: bool = False
    hide_version: bool = False
    hidden: bool = False
    authors: list = field(default_factory=list)
    copyright: str = ""
    metadata: dict = field(default_factory=dict)
    use_short_option_handling: bool = False
    skip_flag_parsing: bool = False
    mutually_exclusive_flags: list = field(default_factory=list)
    arguments: list = field(default_factory=list)
    invalid_flag_access_handler: Callable[[Command, str], None] | None = None
    reader: Any = None
    writer: Any = None
    err_writer: Any = None

    _parent: Command | None = field(default=None, init=False, repr=False)
    _set_flags: list = field(default_factory=list, init=False, repr=False)
    _parsed_args: ParsedArgs = field(default_factory=ParsedArgs, init=False, repr=False)

    def __post_init__(self):
        for sub in self.commands:
            sub._parent = self

    @property
    def parent(self):
        """The command this one is nested in, or None at the root."""
        return self._parent

    def full_name(self):
        """Return the names of this command's path from the root, space separated."""
        if self._parent is None:
            return self.name
        return f"{self._parent.full_name()} {self.name}"

    def command(self, name):
        """Return the direct sub-command answering to ``name``, or None."""
        return next((sub for sub in self.commands if sub.has_name(name)), None)

    def names(self):
        """Return the name followed by the aliases."""
        return [self.name, *self.aliases]

    def has_name(self, name):
        return name in self.names()

    def _all_flags(self):
        flags = list(self.flags)
        for group in self.mutually_exclusive_flags:
            for members in getattr(group, "flags", group):
                flags.extend(members)
        return flags

    def _short_option_handling_enabled(self):
        return any(cmd.use_short_option_handling for cmd in self.lineage())

    def visible_categories(self):
        """Return the command categories that hold at least one visible command."""
        categories = CommandCategories()
        for sub in self.commands:
            categories.add_command(sub.category, sub)
        return [cat for cat in categories.categories() if cat.visible_commands()]

    def visible_commands(self):
        """Return the sub-commands that are neither hidden nor the help command."""
        return [sub for sub in self.commands if not sub.hidden and sub.name != HELP_NAME]

    def visible_flag_categories(self):
        """Return the visible flag categories with the flags they contain."""
        return flag_categories_from_flags(self._all_flags()).visible_categories()

    def visible_flags(self):
        """Return the flags, including exclusive-group flags, that are visible."""
        return _visible(self._all_flags())

    def visible_persistent_flags(self):
        """Return the root's visible flags that are not local."""
        persistent = []
        for flag in self.root().flags:
            is_local = getattr(flag, "is_local", None)
            if not callable(is_local) or is_local():
                continue
            persistent.append(flag)
        return _visible(persistent)

    def append_flag(self, flag):
        """Add a flag unless this very flag is already present."""
        if not _contains(self.flags, flag):
            self.flags.append(flag)

    def append_command(self, command):
        """Add a sub-command unless already present, making this its parent."""
        if not _contains(self.commands, command):
            command._parent = self
            self.commands.append(command)

    def root(self):
        """Return the command at the root of the tree."""
        return self if self._parent is None else self._parent.root()

    def lineage(self):
        """Return this command and its ancestors, from child to root."""
        lineage = []
        cmd = self
        while cmd is not None:
            lineage.append(cmd)
            cmd = cmd._parent
        return lineage

    def _local_flag(self, name):
        for flag in self._all_flags():
            if name in flag.names():
                tracef("flag found for name %r (cmd=%r)", name, self.name)
                return flag
        return None

    def _on_invalid_flag(self, name):
        for cmd in self.lineage():
            if cmd.invalid_flag_access_handler is not None:
                cmd.invalid_flag_access_handler(cmd, name)
                return

    def lookup_flag(self, name):
        """Find a flag by name here or in an ancestor; report and return None if absent."""
        for cmd in self.lineage():
            found = cmd._local_flag(name)
            if found is not None:
                return found
        tracef("flag NOT found for name %r (cmd=%r)", name, self.name)
        self._on_invalid_flag(name)
        return None

    def check_required_flags(self):
        """Raise RequiredFlagsError if a required flag of this command is unset."""
        tracef("checking for required flags (cmd=%r)", self.name)
        missing = [
            flag.names()[0]
            for flag in self._all_flags()
            if _is_required(flag) and not flag.is_set()
        ]
        if missing:
            tracef("found missing required flags %r (cmd=%r)", missing, self.name)
            raise RequiredFlagsError(missing)

    def check_all_required_flags(self):
        """Check required flags on this command and every ancestor."""
        for cmd in self.lineage():
            cmd.check_required_flags()

    def num_flags(self):
        """Return how many of this command's flags are set."""
        return sum(1 for flag in self._all_flags() if flag.is_set())

    def set(self, name, value):
        """Set the flag called ``name`` to ``value``."""
        flag = self.lookup_flag(name)
        if flag is None:
            raise ValueError(f"no such flag -{name}")
        if not _contains(self._set_flags, flag):
            self._set_flags.append(flag)
        flag.set(name, value)

    def is_set(self, name):
        """Return whether the named flag has been set."""
        flag = self.lookup_flag(name)
        return flag is not None and bool(flag.is_set())

    def local_flag_names(self):
        """Return the names of this command's set flags, without duplicates."""
        names = []
        for flag in self._all_flags():
            if flag.is_set():
                names.extend(flag.names())
        return list(dict.fromkeys(names))

    def flag_names(self):
        """Return the set flag names of the ancestors followed by this command's."""
        names = self.local_flag_names()
        if self._parent is not None:
            names = self._parent.flag_names() + names
        return names

    def count(self, name):
        """Return how many times the named flag occurred, or 0."""
        counter = getattr(self.lookup_flag(name), "count", None)
        return counter() if callable(counter) else 0

    def value(self, name):
        """Return the value of the named flag, or None."""
        flag = self.lookup_flag(name)
        return flag.get() if flag is not None else None

    def args(self):
        """Return the positional arguments left after parsing."""
        return self._parsed_args

    def narg(self):
        return len(self._parsed_args)

    def parse_arguments(self, args):
        """Feed words through the declared arguments and keep what is left."""
        words = list(args)
        remaining = parse_all(self.arguments, words) if self.arguments else words
        self._parsed_args = ParsedArgs(remaining)
        return self._parsed_args

    def run_flag_actions(self, ctx):
        """Run the action of every flag that was set through this command."""
        tracef("runFlagActions")
        for flag in self._set_flags:
            action = getattr(flag, "run_action", None)
            if callable(action):
                action(ctx, self)

    def get_arg(self, name):
        """Return the value of the named positional argument, or None."""
        tracef("command %s looking for args %s", self.name, name)
        for argument in self.arguments:
            if argument.has_name(name):
                return argument.get()
        return None

    def _typed_arg(self, name, kind, default):
        for argument in self.arguments:
            if argument.has_name(name):
                return argument.get() if isinstance(argument, kind) else default
        return default

    def string_arg(self, name):
        return self._typed_arg(name, StringArg, "")

    def string_args(self, name):
        return self._typed_arg(name, StringArgs, None)

    def int_arg(self, name):
        return self._typed_arg(name, IntArg, 0)

    def int_args(self, name):
        return self._typed_arg(name, IntArgs, None)

    def uint_arg(self, name):
        return self._typed_arg(name, UintArg, 0)

    def uint_args(self, name):
        return self._typed_arg(name, UintArgs, None)

    def float_arg(self, name):
        return self._typed_arg(name, FloatArg, 0.0)

    def float_args(self, name):
        return self._typed_arg(name, FloatArgs, None)

    def timestamp_arg(self, name):
        return self._typed_arg(name, TimestampArg, None)

    def timestamp_args(self, name):
        return self._typed_arg(name, TimestampArgs, None)