"""Command-line interface for Scam Guard.

Provides subcommands for one-shot classification, an interactive dashboard
shell, and environment information.  Each subcommand imports its heavier
dependencies lazily so that ``scam-guard info`` works even when a provider
integration package is missing.

Entry point
-----------
The ``main()`` function is registered as a console script in
``pyproject.toml``::

    [project.scripts]
    scam-guard = "scam_guard.cli:main"

Usage examples::

    scam-guard classify --feature sms --text "Your KYC expires today, share OTP"
    scam-guard classify --feature phone --phone +911234567890 --text "Asked for UPI PIN"
    scam-guard classify --feature payment_proof --image proof.jpg
    scam-guard shell
    scam-guard info
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from scam_guard.domain.enums import Feature

Prompt = Callable[[str], Awaitable[str]]

_FEATURE_CHOICES = [f.name.lower() for f in Feature]


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="scam-guard",
        description="Scam Guard -- classify messages, links, calls and payment proofs.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        default=False,
        help="Show the package version and exit.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a JSON config file.  Defaults to SCAM_GUARD_* environment variables.",
    )
    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        choices=["anthropic", "openai"],
        help="Chat-model provider for the oracle (overrides config).",
    )
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model identifier for the oracle (overrides config).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level. (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available subcommands")

    # -- classify ----------------------------------------------------------
    classify_parser = subparsers.add_parser(
        "classify",
        help="Classify a single input.",
        description="Send one input to the oracle and print its verdict.",
    )
    classify_parser.add_argument(
        "--feature",
        type=str,
        required=True,
        choices=_FEATURE_CHOICES,
        help="Analysis module to use.",
    )
    classify_parser.add_argument(
        "--text",
        type=str,
        default="",
        help="Message, URL, phone context, or notes for image modules.",
    )
    classify_parser.add_argument(
        "--phone",
        type=str,
        default="",
        help="Phone number (phone module only).",
    )
    classify_parser.add_argument(
        "--image",
        type=str,
        default=None,
        help="Path to a screenshot (screenshot and payment_proof modules).",
    )
    classify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the verdict as JSON instead of a formatted panel.",
    )

    # -- shell -------------------------------------------------------------
    subparsers.add_parser(
        "shell",
        help="Run the interactive dashboard.",
        description="Log in, pick modules, analyze inputs and report threats interactively.",
    )

    # -- info --------------------------------------------------------------
    subparsers.add_parser(
        "info",
        help="Show version, provider availability and policy constants.",
    )

    return parser


def _load_config(args: argparse.Namespace) -> Any:
    from scam_guard.infrastructure.config import AppConfig, load_config_from_json

    if args.config:
        config = load_config_from_json(Path(args.config).read_text(encoding="utf-8"))
    else:
        config = AppConfig.from_env()

    overrides: dict[str, Any] = {}
    if args.provider:
        overrides["provider"] = args.provider
        # a model name from another provider would be wrong
        overrides["model"] = ""
    if args.model:
        overrides["model"] = args.model
    if overrides:
        config = dataclasses.replace(
            config, oracle=dataclasses.replace(config.oracle, **overrides)
        )
        config.validate()
    return config


def _read_image(path: str) -> Any:
    """Load an image file, reporting unreadable or empty files as invalid input."""
    from scam_guard.domain.exceptions import InputValidationError
    from scam_guard.domain.values import ImagePayload

    try:
        return ImagePayload.from_path(path)
    except OSError as exc:
        raise InputValidationError(
            f"Cannot read {path}: {exc.strerror or exc}", field="image"
        ) from exc
    except ValueError as exc:
        raise InputValidationError(f"Cannot use {path}: {exc}", field="image") from exc


# =========================================================================
# Subcommand handlers
# =========================================================================

def _cmd_classify(args: argparse.Namespace) -> int:
    """Handle the ``classify`` subcommand.

    Exit codes: 0 verdict printed, 1 oracle failure, 2 invalid input.
    """
    from scam_guard.domain.exceptions import InputValidationError, OracleError
    from scam_guard.graph.nodes import prepare_submission
    from scam_guard.presentation.console import ConsoleDashboard
    from scam_guard.services.oracle import ClassificationOracle

    feature = Feature[args.feature.upper()]
    dashboard = ConsoleDashboard()

    try:
        image = _read_image(args.image) if args.image else None
        analysis_input, _ = prepare_submission(feature, args.text, args.phone, image)
    except InputValidationError as exc:
        dashboard.print_error(str(exc))
        return 2

    config = _load_config(args)
    oracle = ClassificationOracle.from_config(config.oracle)
    try:
        result = oracle.classify_sync(feature, analysis_input, image)
    except OracleError as exc:
        dashboard.print_error(exc.user_message)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        dashboard.print_result(feature, result)
    return 0


def _cmd_shell(args: argparse.Namespace) -> int:
    """Handle the ``shell`` subcommand."""
    from scam_guard.presentation.console import ConsoleDashboard
    from scam_guard.services.controller import ScamGuardController

    config = _load_config(args)
    controller = ScamGuardController.from_config(config)
    dashboard = ConsoleDashboard()

    async def prompt(text: str) -> str:
        return await asyncio.to_thread(input, text)

    asyncio.run(run_shell(controller, dashboard, prompt))
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    """Handle the ``info`` subcommand."""
    from scam_guard import __version__
    from scam_guard.domain.values import CONFIDENCE_BANDS
    from scam_guard.infrastructure.llm import ChatModelFactory
    from scam_guard.services.prompts import TRUSTED_DOMAINS

    print(f"Scam Guard v{__version__}")
    print()

    print("Oracle providers:")
    for name, available in ChatModelFactory().available_providers().items():
        status = "[installed]" if available else "[missing]  "
        print(f"  {status} {name}")
    print()

    print("Modules:")
    for feature in Feature:
        print(f"  {feature.name.lower()} -- {feature.title}")
    print()

    print("Confidence bands:")
    for level, (low, high) in CONFIDENCE_BANDS.items():
        print(f"  {level.value}: {low}-{high}%")
    print()

    print("Trusted domains (always Safe):")
    for domain in TRUSTED_DOMAINS:
        print(f"  {domain}")
    return 0


# =========================================================================
# Interactive shell
# =========================================================================

_SHELL_HELP = (
    "Commands: 1-5 or a module name, history, rewards, settings, "
    "toggle <setting>, home, logout, quit"
)


async def run_shell(controller: Any, dashboard: Any, prompt: Prompt) -> None:
    """Drive a :class:`ScamGuardController` from text prompts until ``quit``.

    While the ``notifications`` setting is on, reward credits are echoed as
    live alerts.
    """
    from scam_guard.domain.enums import Screen
    from scam_guard.domain.events import DetectionCredited, DomainEvent, ReportCredited

    def live_alert(event: DomainEvent) -> None:
        if controller.settings.notifications:
            dashboard.print_alert(event)

    cancels = [
        controller.bus.subscribe(DetectionCredited, live_alert),
        controller.bus.subscribe(ReportCredited, live_alert),
    ]
    controller.start()
    try:
        dashboard.console.print("[bold]🛡️  Scam Guard[/bold]  [dim]starting...[/dim]")
        while controller.navigator.screen is Screen.INTRO:
            await asyncio.sleep(0.05)

        while True:
            if controller.navigator.screen is Screen.LOGIN:
                if not await _shell_login(controller, dashboard, prompt):
                    return
                continue

            command = (await prompt(f"[{controller.navigator.current_title}] > ")).strip()
            if command in ("quit", "exit"):
                return
            await _shell_dispatch(controller, dashboard, prompt, command)
    finally:
        for cancel in cancels:
            cancel()
        controller.close()


async def _shell_login(controller: Any, dashboard: Any, prompt: Prompt) -> bool:
    from scam_guard.domain.exceptions import InputValidationError

    email = await prompt("Email (blank to quit): ")
    if not email.strip():
        return False
    password = await prompt("Password: ")
    try:
        controller.login(email, password)
    except InputValidationError as exc:
        dashboard.print_error(str(exc))
        return True
    dashboard.console.print(f"Welcome, {controller.user}.  {_SHELL_HELP}")
    dashboard.print_rewards(controller.rewards)
    return True


async def _shell_dispatch(controller: Any, dashboard: Any, prompt: Prompt, command: str) -> None:
    from scam_guard.domain.exceptions import ScamGuardError

    word, _, rest = command.partition(" ")
    feature = _parse_feature(word)
    try:
        if feature is not None:
            await _shell_analyze(controller, dashboard, prompt, feature)
        elif word == "history":
            dashboard.print_history(controller.history.items)
        elif word == "rewards":
            dashboard.print_rewards(controller.rewards)
        elif word == "settings":
            controller.open_settings()
            dashboard.print_settings(controller.settings)
        elif word == "toggle":
            value = controller.toggle_setting(rest.strip())
            dashboard.comfort_mode = controller.settings.comfort_mode
            dashboard.console.print(f"{rest.strip()} -> {'on' if value else 'off'}")
        elif word == "home":
            controller.go_home()
            dashboard.print_modules()
        elif word == "logout":
            controller.logout()
        else:
            dashboard.console.print(_SHELL_HELP)
    except (ScamGuardError, KeyError) as exc:
        dashboard.print_error(str(exc))


def _parse_feature(word: str) -> Feature | None:
    if word.isdigit() and 1 <= int(word) <= len(Feature):
        return list(Feature)[int(word) - 1]
    try:
        return Feature[word.upper()]
    except KeyError:
        return None


async def _shell_analyze(controller: Any, dashboard: Any, prompt: Prompt, feature: Feature) -> None:
    from scam_guard.domain.enums import SessionStatus
    from scam_guard.domain.exceptions import InputValidationError

    session = controller.select_module(feature)
    dashboard.console.print(f"[bold]{feature.title}[/bold] -- {feature.description}")

    if feature.requires_image:
        path = (await prompt("Screenshot path: ")).strip()
        if path:
            try:
                session.set_image(_read_image(path))
            except InputValidationError as exc:
                dashboard.print_error(str(exc))
    if feature is Feature.PHONE:
        session.set_phone(await prompt("Phone number: "))
        session.set_text(await prompt("What did they ask for? "))
    elif feature is Feature.SMS:
        session.set_text(await prompt("Paste SMS content: "))
    elif feature is Feature.LINK:
        session.set_text(await prompt("Enter URL: "))
    else:
        session.set_text(await prompt("Any extra details? "))

    try:
        status = await session.submit()
    except InputValidationError as exc:
        dashboard.print_error(str(exc))
        return

    if status is SessionStatus.FAILED:
        dashboard.print_error(session.error or "")
        return
    if session.result is None:
        return

    dashboard.print_result(
        feature, session.result, reported=False if session.can_report else None
    )
    if session.can_report:
        answer = await prompt("Report this threat? [y/N] ")
        if answer.strip().lower().startswith("y"):
            session.report()
            dashboard.print_rewards(controller.rewards)


# =========================================================================
# Main entry point
# =========================================================================

def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.version:
        from scam_guard import __version__
        print(f"scam-guard {__version__}")
        sys.exit(0)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    handlers: dict[str, Any] = {
        "classify": _cmd_classify,
        "shell": _cmd_shell,
        "info": _cmd_info,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        exit_code = handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        exit_code = 130
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)
