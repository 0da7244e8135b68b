"""Tests for command dispatch."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from kit.commands.dispatcher import Dispatcher
from kit.commands.introspection import HelpService
from kit.commands.meta import register_meta_commands
from kit.commands.registry import CommandRegistry
from kit.commands.types import Command, CommandExecutionError, CommandKind, CommandModule, ExitStatus


def flat(text: str) -> str:
    return " ".join(text.split())


def operation(name, handler):
    module = CommandModule(path=Path("ops.py"), category="Ops", operation_names=(name,))
    return Command(name=name, kind=CommandKind.OPERATION, description=name, handler=handler, module=module)


@pytest.fixture
def deploy_handler():
    return MagicMock(return_value=0)


@pytest.fixture
def dispatcher(deploy_handler):
    registry = CommandRegistry()
    help_service = MagicMock(spec=HelpService)
    help_service.show_help.return_value = ExitStatus.SUCCESS
    register_meta_commands(registry, help_service)
    registry.register_operation(operation("deploy", deploy_handler))
    registry.freeze()
    return Dispatcher(registry, help_service)


class TestDispatch:
    def test_passes_arguments_unchanged(self, dispatcher, deploy_handler):
        status = dispatcher.dispatch("deploy", ("--force", "prod env", "-h2"))

        assert status == 0
        deploy_handler.assert_called_once_with(["--force", "prod env", "-h2"])

    def test_returns_handler_status(self, dispatcher, deploy_handler):
        deploy_handler.return_value = 3
        assert dispatcher.dispatch("deploy", []) == 3

    def test_none_status_means_success(self, dispatcher, deploy_handler):
        deploy_handler.return_value = None
        assert dispatcher.dispatch("deploy") == ExitStatus.SUCCESS

    def test_unknown_command_returns_127(self, dispatcher, deploy_handler, capsys):
        status = dispatcher.dispatch("does-not-exist", [])

        assert status == 127
        deploy_handler.assert_not_called()
        err = flat(capsys.readouterr().err)
        assert "Command 'does-not-exist' not found" in err
        assert "kit -h" in err

    def test_unknown_command_suggests_close_match(self, dispatcher, capsys):
        dispatcher.dispatch("deplyo", [])
        assert "Did you mean 'deploy'?" in flat(capsys.readouterr().err)

    def test_hidden_meta_commands_are_not_suggested(self, dispatcher):
        assert dispatcher.suggest("serch") is None

    @pytest.mark.parametrize("name", [None, "", "-h", "--help"])
    def test_empty_name_or_help_flag_shows_help(self, dispatcher, deploy_handler, name):
        assert dispatcher.dispatch(name, []) == 0
        dispatcher.help_service.show_help.assert_called_once_with()
        deploy_handler.assert_not_called()

    def test_meta_commands_dispatch_to_help_service(self, dispatcher):
        dispatcher.help_service.show_search.return_value = 0
        dispatcher.dispatch("search", ["dep"])
        dispatcher.help_service.show_search.assert_called_once_with("dep")

    def test_search_without_keyword(self, dispatcher):
        dispatcher.dispatch("search", [])
        dispatcher.help_service.show_search.assert_called_once_with(None)

    def test_command_execution_error_is_reported(self, dispatcher, deploy_handler, capsys):
        deploy_handler.side_effect = CommandExecutionError(
            "remote unreachable", "deploy", suggestion="Check your VPN", status=ExitStatus.USAGE_ERROR
        )

        assert dispatcher.dispatch("deploy", []) == 2
        err = flat(capsys.readouterr().err)
        assert "Error: remote unreachable" in err
        assert "Check your VPN" in err

    def test_other_exceptions_propagate(self, dispatcher, deploy_handler):
        deploy_handler.side_effect = RuntimeError("bug")
        with pytest.raises(RuntimeError):
            dispatcher.dispatch("deploy", [])


def test_default_help_service(capsys):
    registry = CommandRegistry()
    registry.freeze()
    assert Dispatcher(registry).dispatch(None) == 0
    assert "Kit - Shell Toolkit" in capsys.readouterr().out
