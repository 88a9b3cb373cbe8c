# nlcli/session/session.py
from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional, TextIO, Union

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

from ..resolver.resolver import CommandResolver
from ..shell.executor import run_shell_command
from ..utils.schema import ExecutionResult, RiskLabeledCommand

logger = logging.getLogger(__name__)

RISK_STYLES = {"low": "green", "medium": "yellow", "high": "red"}

Executor = Callable[[str], ExecutionResult]


class Outcome(enum.Enum):
    NO_COMMANDS = "no_commands"
    CANCELLED = "cancelled"
    DRY_RUN = "dry_run"
    DECLINED = "declined"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def risk_style(risk: str) -> str:
    return RISK_STYLES.get(risk, "dim")


def validate_instruction(text: str) -> Union[bool, str]:
    return bool(text and text.strip()) or "Please enter an instruction"


def _ask_instruction(console: Console, stream: Optional[TextIO] = None) -> str:
    while True:
        text = Prompt.ask("[bold]What would you like to do?[/bold]", console=console, stream=stream)
        verdict = validate_instruction(text)
        if verdict is True:
            return text.strip()
        console.print(f"[red]{verdict}[/red]")


def _ask_selection(console: Console, commands: List[RiskLabeledCommand], stream: Optional[TextIO] = None) -> int:
    """Return the zero-based index of the chosen command, or -1 for cancel."""
    console.print("  [dim]0. Cancel[/dim]")
    choices = [str(i) for i in range(len(commands) + 1)]
    picked = IntPrompt.ask(
        "[bold]Select a command to run[/bold]",
        console=console,
        choices=choices,
        show_choices=False,
        stream=stream,
    )
    return picked - 1


def _ask_confirm(console: Console, stream: Optional[TextIO] = None) -> bool:
    return Confirm.ask("[bold]Execute this command?[/bold]", console=console, default=False, stream=stream)


class Session:
    """
    One pass through the interactive flow:

      collect instruction -> resolve -> present/select -> (dry-run exit | confirm) -> execute

    Every way out prints something; ``run`` returns which way it was.
    """

    def __init__(
        self,
        resolver: CommandResolver,
        executor: Optional[Executor] = None,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None,
    ):
        self.resolver = resolver
        self.executor = executor or run_shell_command
        self.console = console or Console()
        self.stream = stream

    # ---------- rendering ----------
    def _banner(self) -> None:
        self.console.print("[bold blue]Natural Language CLI[/bold blue]")
        self.console.print("[dim]Convert your instructions into bash commands[/dim]\n")

    def _render_options(self, commands: List[RiskLabeledCommand]) -> None:
        self.console.print("\n[bold green]Available Commands:[/bold green]")
        for i, c in enumerate(commands, 1):
            style = risk_style(c.risk)
            self.console.print(f"\n[b]{i}.[/b] [cyan]{escape(c.command)}[/cyan]")
            self.console.print(f"   [dim]{escape(c.description)}[/dim]")
            self.console.print(f"   [{style}]Risk: {c.risk.upper()}[/{style}]")
        self.console.print()

    def _render_details(self, c: RiskLabeledCommand) -> None:
        style = risk_style(c.risk)
        self.console.print("\n[bold blue]Command Details:[/bold blue]")
        self.console.print(f"Command: [cyan]{escape(c.command)}[/cyan]")
        self.console.print(f"Description: [dim]{escape(c.description)}[/dim]")
        self.console.print(f"Risk Level: [{style}]{c.risk.upper()}[/{style}]")

    # ---------- states ----------
    def run(self, instruction: Optional[str] = None, dry: bool = False) -> Outcome:
        self._banner()
        try:
            if not instruction or not instruction.strip():
                instruction = _ask_instruction(self.console, self.stream)

            with self.console.status("Parsing your instruction..."):
                commands = self.resolver.resolve(instruction)

            if not commands:
                self.console.print("[red]No matching commands found for your instruction.[/red]")
                return Outcome.NO_COMMANDS

            self._render_options(commands)
            index = _ask_selection(self.console, commands, self.stream)
            if index < 0:
                self.console.print("[yellow]Operation cancelled.[/yellow]")
                return Outcome.CANCELLED

            selected = commands[index]
            self._render_details(selected)

            if dry:
                self.console.print("\n[yellow]Dry run mode - command will not be executed.[/yellow]")
                return Outcome.DRY_RUN

            if not _ask_confirm(self.console, self.stream):
                self.console.print("[yellow]Command execution cancelled.[/yellow]")
                return Outcome.DECLINED
        except (KeyboardInterrupt, EOFError):
            self.console.print("\n[yellow]Operation cancelled.[/yellow]")
            return Outcome.CANCELLED

        return self.execute(selected)

    def execute(self, command: RiskLabeledCommand) -> Outcome:
        self.console.print("\n[bold blue]Executing command...[/bold blue]")
        self.console.print(f"[dim]Running: {escape(command.command)}[/dim]")

        try:
            with self.console.status("Executing..."):
                result = self.executor(command.command)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Operation cancelled.[/yellow]")
            return Outcome.CANCELLED
        except Exception as e:
            logger.debug("executor raised", exc_info=True)
            self.console.print("\n[bold red]Execution failed![/bold red]")
            self.console.print(f"[red]Error: {escape(str(e))}[/red]")
            return Outcome.FAILED

        if result.success:
            self.console.print("\n[bold green]Command executed successfully![/bold green]")
            if result.output:
                self.console.print("\n[dim]Output:[/dim]")
                self.console.print(result.output, markup=False, highlight=False)
            return Outcome.SUCCEEDED

        self.console.print("\n[bold red]Command failed![/bold red]")
        if result.error:
            self.console.print("\n[red]Error:[/red]")
            self.console.print(result.error, markup=False, highlight=False)
        return Outcome.FAILED
