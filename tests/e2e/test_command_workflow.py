"""
E2E test for the command workflow.

This test drives a CLI from argv through tokenizing, alias resolution,
input validation, middleware and handler execution, checking both the
RunResult and what the user sees.

Tests cover:
- Running commands and subcommands by name and by alias
- Validation failures reported without running the handler
- Help and version output
- Middleware ordering and short-circuiting
"""

from typing import Any

import pytest

from cmdinfra import LoggingMiddleware, Outcome, create_middleware_builder


def argv(*args: str) -> list[str]:
    return ["node", "cli", *args]


@pytest.mark.e2e
class TestCommandWorkflow:
    """E2E tests for running commands."""

    def test_greet(self, greet_cli):
        """Test flags and values reach the handler as a validated model."""
        result = greet_cli.run(argv("greet", "--name", "World", "--uppercase"))

        assert result.outcome is Outcome.SUCCESS
        assert result.value == {"message": "HELLO, WORLD!"}

    def test_greet_by_alias(self, greet_cli):
        result = greet_cli.run(argv("hi", "--name=Bob"))

        assert result.command == "greet"
        assert result.value == {"message": "Hello, Bob!"}

    def test_subcommand_by_scoped_alias(self, greet_cli):
        """Test 'user new' resolves to 'user:create'."""
        result = greet_cli.run(
            argv("user", "new", "--email", "joe@example.com", "--name", "Joe")
        )

        assert result.command == "user:create"
        assert result.value == {"email": "joe@example.com", "name": "Joe"}

    def test_missing_required_option(self, greet_cli, log_stream):
        """Test invalid input is reported and the handler never runs."""
        calls = []
        (
            greet_cli.add("track")
            .input(greet_cli.registry.get("greet").input_schema)
            .action(lambda **kwargs: calls.append(kwargs))
        )

        result = greet_cli.run(argv("track"))

        assert result.outcome is Outcome.VALIDATION_FAILED
        assert calls == []
        output = log_stream.getvalue()
        assert "error: invalid command arguments:" in output
        assert "error: - name: Field required" in output
        assert "info: Run with --help for usage information." in output

    def test_handler_failure_is_logged(self, cli, log_stream):
        def explode(parsed_input, context, config):
            raise RuntimeError("disk full")

        cli.add("backup").input(dict[str, Any]).action(explode)

        result = cli.run(argv("backup"))

        assert result.outcome is Outcome.EXECUTION_FAILED
        assert "error: error executing command: disk full" in log_stream.getvalue()

    def test_unknown_command(self, greet_cli, out, log_stream):
        result = greet_cli.build_engine(out=out).run(argv("user", "frob"))

        assert result.outcome is Outcome.UNKNOWN_COMMAND
        assert "error: unknown command: user frob" in log_stream.getvalue()
        assert out.getvalue().startswith("Usage: test <command> [options]")

    def test_handler_uses_context_logger(self, cli, log_stream):
        def handler(parsed_input, context, config):
            context.logger.success("created", extra={"id": 7})

        cli.add("user create").input(dict[str, Any]).action(handler)

        cli.run(argv("user", "create"))

        assert "success: created [id:7]" in log_stream.getvalue()


@pytest.mark.e2e
class TestHelpWorkflow:
    """E2E tests for help and version output."""

    def test_general_help(self, greet_cli, out):
        greet_cli.build_engine(out=out).run(argv())

        output = out.getvalue()
        assert "General:" in output
        assert f"  {'greet':<15} Greet someone" in output
        assert "Users:" in output
        assert "create" not in output

    def test_help_flag_overrides_command(self, greet_cli, out):
        """Test --help anywhere shows general help, even after a valid command."""
        result = greet_cli.build_engine(out=out).run(argv("hi", "--name", "x", "--help"))

        assert result.outcome is Outcome.HELP
        assert out.getvalue().startswith("Usage: test <command> [options]")

    def test_command_help_via_help_command(self, greet_cli, out):
        result = greet_cli.build_engine(out=out).run(argv("help", "user", "create"))

        assert result.command == "user:create"
        output = out.getvalue()
        assert output.startswith("Usage: test user create [options]")
        assert "Aliases: new" in output
        assert "--email" in output

    def test_version(self, greet_cli, out):
        result = greet_cli.build_engine(out=out).run(argv("-v"))

        assert result.outcome is Outcome.VERSION
        assert out.getvalue() == "v2.0.0\n"


@pytest.mark.e2e
class TestMiddlewareWorkflow:
    """E2E tests for middleware around real commands."""

    def test_order_and_context(self, cli):
        trace = []

        def outer(parsed_input, context, metadata, call_next):
            trace.append("outer:before")
            result = call_next(user="joe")
            trace.append("outer:after")
            return result

        def inner(parsed_input, context, metadata, call_next):
            trace.append(f"inner:{context.user}")
            return call_next()

        def handler(parsed_input, context, config):
            trace.append("handler")
            return context.user

        cli.use(outer).use(inner)
        cli.add("whoami").input(dict[str, Any]).action(handler)

        result = cli.run(argv("whoami"))

        assert result.value == "joe"
        assert trace == ["outer:before", "inner:joe", "handler", "outer:after"]

    def test_short_circuit(self, cli):
        ran = []
        deny = (
            create_middleware_builder("deny")
            .when(lambda inp, ctx, meta: meta.get("protected"))
            .before(lambda inp, ctx: {"denied": True})
            .build()
        )

        def guard(parsed_input, context, metadata, call_next):
            if context.get("denied"):
                return "denied"
            return call_next()

        cli.use(deny).use(guard)
        cli.add("admin", protected=True).input(dict[str, Any]).action(
            lambda **kwargs: ran.append(True)
        )

        result = cli.run(argv("admin"))

        assert result.value == "denied"
        assert ran == []

    def test_logging_middleware(self, cli, log_stream):
        cli.use(LoggingMiddleware())
        cli.add("ping").input(dict[str, Any]).action(lambda **kwargs: "pong")

        assert cli.run(argv("ping")).value == "pong"

        output = log_stream.getvalue()
        assert "debug: running command [command:ping]" in output
        assert "debug: command finished" in output
