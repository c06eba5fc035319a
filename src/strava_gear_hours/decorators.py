"""Command decorators for reducing boilerplate."""

from __future__ import annotations

import functools
import inspect
import sys
from collections.abc import Callable
from typing import Any, TypeVar, get_type_hints

import typer

from strava_gear_hours.exceptions import GearHoursError

R = TypeVar("R")


def _hide_client_parameter(wrapper: Callable, func: Callable) -> None:
    """Hide the injected first parameter (client) from Typer.

    Typer builds its options from the signature and the type hints, so both
    are rewritten on ``wrapper``. Annotations are evaluated here because the
    command modules use ``from __future__ import annotations``.
    """
    sig = inspect.signature(func)
    params = list(sig.parameters.values())
    if not params:
        return
    client_param, params = params[0], params[1:]

    try:
        type_hints = get_type_hints(func, include_extras=True)
    except NameError:
        type_hints = {}

    wrapper.__signature__ = sig.replace(  # type: ignore[attr-defined]
        parameters=[
            param.replace(annotation=type_hints[param.name]) if param.name in type_hints else param
            for param in params
        ]
    )
    wrapper.__annotations__ = {
        k: v for k, v in func.__annotations__.items() if k != client_param.name
    }


def _run_with_client(func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
    """Build the client from config and run ``func``, turning errors into exits."""
    # Import here to avoid circular imports
    from strava_gear_hours import cli
    from strava_gear_hours.client import get_client
    from strava_gear_hours.config import Config

    try:
        config = Config.load(cli.state.config_path)
        client = get_client(config)
        return func(client, *args, **kwargs)
    except GearHoursError as e:
        print(f"error: {e.message}", file=sys.stderr)
        if e.hint and not cli.state.quiet:
            print(f"hint: {e.hint}", file=sys.stderr)
        raise typer.Exit(e.exit_code) from None


def with_client(func: Callable[..., R]) -> Callable[..., R]:
    """Inject a StravaClient as first argument.

    Usage:
        @app.command()
        @with_client
        def my_command(client: StravaClient, arg1: str) -> None:
            profile = client.get_athlete_profile()
            ...

    GearHoursError becomes ``error:``/``hint:`` lines on stderr and an exit
    with the error's exit code.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> R:
        return _run_with_client(func, *args, **kwargs)

    _hide_client_parameter(wrapper, func)
    return wrapper


def authenticated_command(func: Callable[..., Any]) -> Callable[..., None]:
    """Like ``with_client``, and output whatever the command returns.

    Usage:
        @app.command()
        @authenticated_command
        def my_command(client: StravaClient) -> Any:
            return client.get_athlete_profile().gear  # Auto-output
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        result = _run_with_client(func, *args, **kwargs)
        if result is not None:
            emit_output(result, getattr(func, "human_columns", None))

    _hide_client_parameter(wrapper, func)
    return wrapper


def human_columns(*columns: tuple[str, str]) -> Callable[[Callable[..., R]], Callable[..., R]]:
    """Attach (field, header) pairs used when the output format is human."""

    def decorator(func: Callable[..., R]) -> Callable[..., R]:
        func.human_columns = list(columns)  # type: ignore[attr-defined]
        return func

    return decorator


def emit_output(data: Any, columns: list[tuple[str, str]] | None = None) -> None:
    """Emit data using global output settings."""
    from strava_gear_hours import cli
    from strava_gear_hours.output import output

    output(
        data,
        format=cli.state.format,
        fields=cli.state.fields,
        no_header=cli.state.no_header,
        human_columns=columns,
    )


def emit_result(data: Any, human_msg: str) -> None:
    """Emit a result: ``human_msg`` for human format, ``data`` otherwise."""
    from strava_gear_hours import cli
    from strava_gear_hours.output import emit_result as _emit_result

    _emit_result(
        data,
        human_msg,
        format=cli.state.format,
        fields=cli.state.fields,
        no_header=cli.state.no_header,
    )
