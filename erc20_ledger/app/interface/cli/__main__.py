import inspect
import logging
from typing import Optional

import typer
from dotenv import load_dotenv
from InquirerPy import inquirer

from erc20_ledger.app.interface.tasks import TASKS
from erc20_ledger.app.interface.tasks.replay_erc20_events_task import (
    replay_erc20_events_task,
)


load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

app = typer.Typer()
ledger_app = typer.Typer(help="cli for rebuilding ERC20 ledger state from on chain logs.")
app.add_typer(ledger_app, name="ledger")


def _echo_stats(stats) -> None:
    typer.echo(f"processed: {stats.processed}")
    for reason, count in sorted(stats.skipped.items(), key=lambda kv: kv[0].value):
        typer.echo(f"skipped ({reason.value}): {count}")


@ledger_app.command("run")
def run() -> None:
    task_name = inquirer.select(
        message="Select task:",
        choices=list(TASKS.keys()),
        pointer="❯",
        instruction="Use ↑/↓ to move, Enter to select",
    ).execute()
    chain_id = int(
        inquirer.text(
            message="Chain ID (e.g. 1 for Ethereum mainnet):",
            default="1",
        ).execute()
    )
    from_block = inquirer.text(
        message="From block (inclusive):",
        default="earliest",
    ).execute()
    to_block = inquirer.text(
        message="To block (inclusive):",
        default="latest",
    ).execute()

    task = TASKS[task_name]

    kwargs: dict[str, object] = {"chain_id": chain_id}

    params = inspect.signature(task).parameters

    if "from_block" in params:
        kwargs["from_block"] = from_block
    if "to_block" in params:
        kwargs["to_block"] = to_block

    if "token_address" in params:
        token_str = inquirer.text(
            message="Token contract (optional, empty = all ERC20 logs):",
            default="",
        ).execute()
        kwargs["token_address"] = token_str.strip() or None

    _echo_stats(task(**kwargs))


@ledger_app.command("replay")
def replay(
    chain_id: int = typer.Option(1, help="Chain ID (e.g. 1 for Ethereum mainnet)."),
    from_block: str = typer.Option("earliest", help="From block (inclusive)."),
    to_block: str = typer.Option("latest", help="To block (inclusive)."),
    token_address: Optional[str] = typer.Option(None, help="Restrict to one token contract."),
) -> None:
    stats = replay_erc20_events_task(
        chain_id=chain_id,
        from_block=from_block,
        to_block=to_block,
        token_address=token_address,
    )
    _echo_stats(stats)


def main() -> None:
    app()


if __name__ == "__main__":
    LOGO = r"""
      --- ERC20 Ledger CLI ---
    """
    typer.echo(LOGO)
    main()
