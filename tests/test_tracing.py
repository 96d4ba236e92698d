import pytest

from clikit import tracing
from clikit.tracing import set_tracing, tracef, tracing_enabled


@pytest.fixture(autouse=True)
def _restore_tracing():
    previous = tracing_enabled()
    yield
    set_tracing(previous)


def test_only_enabled_messages_are_written(capsys):
    set_tracing(False)
    tracef("something")

    set_tracing(True)
    tracef("foothing")

    err = capsys.readouterr().err
    assert "foothing" in err
    assert "something" not in err


def test_set_tracing_toggles_state():
    set_tracing(True)
    assert tracing_enabled() is True
    set_tracing(False)
    assert tracing_enabled() is False


def test_trace_line_formats_arguments_and_names_caller(capsys):
    set_tracing(True)
    tracef("flag %r found (cmd=%r)", "name", "root")

    err = capsys.readouterr().err
    assert err.startswith("## CLIKIT TRACE ")
    assert "flag 'name' found (cmd='root')" in err
    assert "test_trace_line_formats_arguments_and_names_caller" in err
    assert err.endswith("\n")


def test_trailing_newline_is_not_doubled(capsys):
    set_tracing(True)
    tracef("done\n")

    err = capsys.readouterr().err
    assert err.endswith("done\n")
    assert not err.endswith("\n\n")


def test_disabled_writes_nothing(capsys):
    set_tracing(False)
    tracef("quiet %s", "please")
    assert capsys.readouterr().err == ""
    assert tracing.tracing_enabled() is False