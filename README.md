# clikit

Building blocks for command-line applications. The package provides a tree
of commands, flag lookup across that tree, and typed positional arguments.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Positional arguments (`clikit.args`)

Typed arguments take words from the command line in order.

- Single arguments take at most one word: `StringArg`, `IntArg`, `UintArg`,
  `FloatArg`, `TimestampArg`, `StringMapArg`. If no word is left, `get()`
  returns the `value` default.
- List arguments take between `min` and `max` words: `StringArgs`,
  `IntArgs`, `UintArgs`, `FloatArgs`, `TimestampArgs`. `max=-1` means no
  limit. With `max=0`, or with `min` greater than `max`, the argument issues
  a warning and takes nothing.

```python
from clikit.args import IntArgs, FloatArgs

ints = IntArgs(name="ia", min=1, max=1)
floats = FloatArgs(name="fa", min=0, max=2)

rest = ints.parse(["-10", "10.1", "11.09"])
rest = floats.parse(rest)

ints.get()    # [-10]
floats.get()  # [10.1, 11.09]
ints.usage()  # "ia [ia ...]"
```

`parse` returns the words it did not use. A word that cannot be converted
raises `ArgumentError`. So does a list argument that gets fewer than `min`
words. If `destination` is given, it is a callable that receives the parsed
value, or for a list argument a copy of the list.

There are more options:

- Integer arguments accept a `base`. Base 0 follows prefix rules such as
  `0x`. `UintArg` and `UintArgs` reject signs.
- Timestamp arguments accept `layouts`, which are `strptime` formats; the
  module defines `RFC3339` and `DATE_TIME`. They also accept a `tz` that is
  used for naive results. With no layouts, the text is read as ISO 8601.
- `StringMapArg` parses `key=value` items separated by commas.
- String arguments accept `trim_space`.

`any_arguments()` returns an argument set that takes any number of words.
`parse_all(arguments, words)` feeds the words through each argument in turn.

`ParsedArgs` holds the words left over. It offers:

- `get(n)` and `first()`, which return `""` when the word is absent
- `tail()`
- `present()`
- `slice()`
- `len()`
- iteration

## Commands (`clikit.command`)

`Command` is a dataclass with these fields:

- `name`, `aliases`, `usage`, `description`, `category`, `hidden`
- `flags`, `mutually_exclusive_flags`, `arguments`, `commands`
- further descriptive fields

Sub-commands passed in `commands`, or added with `append_command`, get the
command as their `parent`. These methods answer questions about the tree:

- `full_name()`, `names()`, `has_name(name)`, `command(name)`
- `root()`, `lineage()`
- `visible_commands()`, which leaves out hidden commands and one named `help`
- `visible_categories()`
- `visible_flags()`, `visible_flag_categories()`, `visible_persistent_flags()`

Flags are any objects that provide `names()`, `is_set()`,
`set(name, value)` and `get()`. They may also provide `is_visible()`,
`is_required()`, `is_local()`, `count()`, `run_action(ctx, command)` and a
`category` attribute. Flag lookup searches the command and then its
ancestors. These methods use that lookup:

- `lookup_flag`, `value`, `is_set`, `set`, `count`
- `local_flag_names`, `flag_names`, `num_flags`

When a flag is not found, the nearest `invalid_flag_access_handler(command,
name)` in the lineage is called. `set` raises `ValueError` for an unknown
name.

`check_required_flags()` raises `RequiredFlagsError` when a required flag is
unset. `check_all_required_flags()` does the same for every ancestor as
well. `run_flag_actions(ctx)` runs the actions of flags set through `set`.

`parse_arguments(words)` feeds words through the declared arguments and
stores the rest, which `args()` and `narg()` return afterwards. Parsed values
are read back by name with these accessors:

- `get_arg`
- `string_arg` / `string_args`
- `int_arg` / `int_args`
- `uint_arg` / `uint_args`
- `float_arg` / `float_args`
- `timestamp_arg` / `timestamp_args`

If the argument is missing or of another type, an accessor returns that
type's zero value. List accessors and `timestamp_arg` return `None`.

## Categories (`clikit.category`)

`CommandCategories` groups commands by category name, keeping categories in
the order they were first seen. `CommandCategory.visible_commands()` leaves
out hidden commands.

`flag_categories_from_flags(flags)` groups visible flags that have a
category. Uncategorized visible flags go under `""`, but only when at least
one flag has a category. `FlagCategories.visible_categories()` lists the
categories sorted by name. `VisibleFlagCategory.flags()` lists the flags in
a category sorted by their `str()`.

## Tracing (`clikit.tracing`)

To write internal trace messages to standard error, either:

- set `CLIKIT_TRACING=on` in the environment before import, or
- call `set_tracing(True)`.

`tracing_enabled()` reports the current state. `tracef(message, *args)`
writes one line tagged with the caller's location.

## What this package does not do

There is no way to run a command from a full argument list. Nothing parses
`--flag` options, dispatches to sub-commands or calls actions and hooks, and
nothing prints help or version text. No concrete flag types are included;
flags must be supplied by the application as objects with the methods listed
above. No command-line program is installed.