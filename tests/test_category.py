from dataclasses import dataclass

from clikit.category import (
    CommandCategories,
    CommandCategory,
    FlagCategories,
    flag_categories_from_flags,
)


@dataclass(eq=False)
class FakeCommand:
    name: str
    hidden: bool = False


@dataclass(eq=False)
class FakeFlag:
    name: str
    aliases: tuple = ()
    category: str = ""
    hidden: bool = False

    def names(self):
        return [self.name, *self.aliases]

    def is_visible(self):
        return not self.hidden

    def __str__(self):
        return f"--{self.name}"


class UncategorizedFlag:
    def is_visible(self):
        return True

    def __str__(self):
        return "--plain"


def test_add_command_groups_by_category():
    c1, c2, c3 = FakeCommand("command1"), FakeCommand("command2"), FakeCommand("command3")
    cats = CommandCategories()
    cats.add_command("1", c1)
    cats.add_command("1", c2)
    cats.add_command("2", c3)

    listed = cats.categories()
    assert [c.name for c in listed] == ["1", "2"]
    assert listed[0].commands == [c1, c2]
    assert listed[1].commands == [c3]
    assert len(cats) == 2


def test_categories_returns_new_list():
    cats = CommandCategories()
    cats.add_command("a", FakeCommand("x"))
    cats.categories().clear()
    assert len(cats.categories()) == 1


def test_visible_commands_skips_hidden():
    shown = FakeCommand("command2")
    category = CommandCategory("2", [FakeCommand("command1", hidden=True), shown])
    assert category.visible_commands() == [shown]


def test_empty_categories_have_no_visible_commands():
    for category in (CommandCategory("foo", []), CommandCategory("goo")):
        assert category.visible_commands() == []


def test_visible_flag_categories_from_flags():
    flags = [
        FakeFlag("strd"),
        FakeFlag("strd1", hidden=True),
        FakeFlag("intd", aliases=("altd1", "altd2"), category="cat1"),
        FakeFlag("sfd", category="cat2", hidden=True),
        FakeFlag("mutex", category="cat2"),
    ]
    vfc = flag_categories_from_flags(flags).visible_categories()
    assert [c.name for c in vfc] == ["", "cat1", "cat2"]

    assert vfc[0].flags()[0].names() == ["strd"]
    assert len(vfc[0].flags()) == 1

    assert len(vfc[1].flags()) == 1
    assert vfc[1].flags()[0].names() == ["intd", "altd1", "altd2"]

    assert len(vfc[2].flags()) == 1
    assert vfc[2].flags()[0].names() == ["mutex"]


def test_no_categorized_flags_yields_no_categories():
    flags = [FakeFlag("a"), FakeFlag("b"), FakeFlag("c", category="x", hidden=True)]
    assert flag_categories_from_flags(flags).visible_categories() == []


def test_flags_without_category_attribute_are_ignored():
    flags = [UncategorizedFlag(), FakeFlag("tagged", category="cat")]
    vfc = flag_categories_from_flags(flags).visible_categories()
    assert [c.name for c in vfc] == ["cat"]
    assert [str(f) for f in vfc[0].flags()] == ["--tagged"]


def test_flag_categories_sorted_and_flags_filtered():
    cats = FlagCategories()
    cats.add_flag("zeta", FakeFlag("b"))
    cats.add_flag("alpha", FakeFlag("y"))
    cats.add_flag("zeta", FakeFlag("a"))
    cats.add_flag("zeta", FakeFlag("h", hidden=True))

    listed = cats.visible_categories()
    assert [c.name for c in listed] == ["alpha", "zeta"]
    assert [f.name for f in listed[1].flags()] == ["a", "b"]


def test_flags_with_same_text_replace_each_other():
    cats = FlagCategories()
    first, second = FakeFlag("dup"), FakeFlag("dup")
    cats.add_flag("c", first)
    cats.add_flag("c", second)
    (category,) = cats.visible_categories()
    assert category.flags() == [second]