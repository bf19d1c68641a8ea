"""Command-line interface for the focus timer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import typer

from .config import TimerSettings
from .manager import ActivityManager, BreakManager, SessionManager
from .models import ActivityRecord, Break, InvalidDurationError, Session
from .observer import CompletionWaiter, ObserverGroup
from .paths import get_log_path
from .reporting import ConsolePrinter, print_balance
from .scheduler import TimerLoop
from .store import ActivityStore, RewardLedger

logger = logging.getLogger(__name__)

app = typer.Typer(help="Focus sessions and breaks with coin rewards.")


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", path_type=Path, help="Write logs to this file."
    ),
    save_log: bool = typer.Option(
        False, "--save-log", help="Write logs to the default per-user log file."
    ),
) -> None:
    if save_log and log_file is None:
        log_file = get_log_path()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        filename=str(log_file) if log_file else None,
    )


@app.command()
def session(
    duration: int = typer.Option(
        25 * 60, "--duration", "-d", help="Session length in seconds."
    ),
    cancel_after: Optional[float] = typer.Option(
        None, "--cancel-after", min=0.0, help="Cancel the session after this many seconds."
    ),
    interval: float = typer.Option(
        1.0, "--interval", min=0.001, help="Seconds between ticks."
    ),
) -> None:
    """Run a focus session and report the coin balance afterwards."""
    record = _build_record(Session, duration)
    settings = TimerSettings.from_values(interval_seconds=interval)
    store = ActivityStore()
    ledger = RewardLedger(settings.starting_balance)

    def factory(observer: ObserverGroup, loop: TimerLoop) -> ActivityManager:
        return SessionManager(
            observer, scheduler=loop, store=store, ledger=ledger, settings=settings
        )

    _run_activity(record, factory, settings, cancel_after)
    print_balance(store, ledger)


@app.command("break")
def break_(
    duration: int = typer.Option(5 * 60, "--duration", "-d", help="Break length in seconds."),
    cancel_after: Optional[float] = typer.Option(
        None, "--cancel-after", min=0.0, help="Cancel the break after this many seconds."
    ),
    interval: float = typer.Option(
        1.0, "--interval", min=0.001, help="Seconds between ticks."
    ),
) -> None:
    """Run a break."""
    record = _build_record(Break, duration)
    settings = TimerSettings.from_values(interval_seconds=interval)

    def factory(observer: ObserverGroup, loop: TimerLoop) -> ActivityManager:
        return BreakManager(observer, scheduler=loop, settings=settings)

    _run_activity(record, factory, settings, cancel_after)


def _build_record(record_type: type[ActivityRecord], duration: int) -> ActivityRecord:
    try:
        return record_type(duration_seconds=duration)
    except InvalidDurationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--duration") from exc


def _run_activity(
    record: ActivityRecord,
    factory: Callable[[ObserverGroup, TimerLoop], ActivityManager],
    settings: TimerSettings,
    cancel_after: Optional[float],
) -> None:
    waiter = CompletionWaiter()
    observer = ObserverGroup([ConsolePrinter(), waiter])
    with TimerLoop(join_timeout=settings.join_timeout.total_seconds()) as loop:
        manager = factory(observer, loop)
        # Start and cancel on the loop thread so every callback shares one context.
        loop.call_later(0, lambda: manager.start_activity(record))
        if cancel_after is not None:
            loop.call_later(cancel_after, manager.cancel_activity)
        try:
            while not waiter.wait(0.5):
                pass
        except KeyboardInterrupt:
            logger.info("Interrupted; cancelling %s.", record.kind)
            loop.call_later(0, manager.cancel_activity)
            waiter.wait(settings.join_timeout.total_seconds())
    logger.debug("%s finished: %s", record.kind.capitalize(), waiter.outcome)
