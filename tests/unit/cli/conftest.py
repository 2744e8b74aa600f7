"""Fixtures for CLI tests."""

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def skip_logging_setup(monkeypatch):
    """Leave the root logger alone so caplog keeps working."""
    monkeypatch.setattr("mediashrink.cli._configure_logging", lambda *args: None)


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def invoke(cli_runner, fake_runner):
    """Invoke the CLI with a scripted tool runner.

    Returns a function taking the argv list plus optional scripted results;
    the FakeToolRunner used is attached to the result as ``tool_runner``.
    """
    from mediashrink.cli import main

    def _invoke(args, *results, create_output=False):
        tool_runner = fake_runner(*results, create_output=create_output)
        result = cli_runner.invoke(main, args, obj={"runner": tool_runner})
        result.tool_runner = tool_runner
        return result

    return _invoke
