import time

from art import text2art
from rich import box
from rich.console import Console as RichConsole
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.models import Config
from src.utils.sleeper import CancellableSleeper
from src.utils.utils import format_duration


class Console:
    __slots__ = ("rich_console",)

    def __init__(self, rich_console: RichConsole | None = None):
        self.rich_console = rich_console or RichConsole()

    def show_dev_info(self):
        print("\033c", end="")

        styled_title = Text(text2art("Pharos", font="doom"), style="cyan")
        content = Text.assemble(
            styled_title,
            "\n👉 Daily check-in, faucet, transfers, swaps and liquidity on Pharos testnet\n",
        )

        panel = Panel(
            content,
            border_style="yellow",
            expand=False,
            title="[bold green]Welcome[/bold green]",
        )
        self.rich_console.print(panel)
        print()

    def display_info(self, config: Config):
        policy = config.policy
        table = Table(title="System Configuration", box=box.ROUNDED)
        table.add_column("Parameter", style="cyan")
        table.add_column("Value", style="magenta")

        table.add_row("Accounts", str(len(config.accounts)))
        table.add_row("Proxies", str(len(config.proxies)))
        table.add_row("RPC", config.rpc_url)
        table.add_row("Chain", f"{config.chain} ({config.chain_config.id})")
        table.add_row(
            "Actions per wallet",
            f"transfer {policy.quota.transfer} / swap {policy.quota.swap} / "
            f"liquidity {policy.quota.liquidity}",
        )
        table.add_row("Shuffle action groups", str(policy.shuffle_action_groups))
        table.add_row("Daily tasks", ", ".join(policy.daily_tasks) or "-")
        table.add_row(
            "Delay between actions",
            f"{policy.delay_between_actions.min}-{policy.delay_between_actions.max} sec",
        )
        table.add_row("Cycle cooldown", format_duration(policy.cycle_cooldown))

        self.rich_console.print(
            Panel(
                table,
                expand=False,
                border_style="green",
                title="[bold yellow]System Information[/bold yellow]",
            )
        )

    def build(self, config: Config):
        self.show_dev_info()
        self.display_info(config)

    @staticmethod
    def _render_countdown(remaining: int) -> Text:
        return Text.assemble(
            ("⏳ Next cycle in ", "yellow"),
            (format_duration(remaining), "bold cyan"),
        )

    async def countdown(self, seconds: int, sleeper: CancellableSleeper) -> bool:
        """Renders a live countdown. Returns False when interrupted by shutdown."""
        deadline = time.monotonic() + seconds

        with Live(
            self._render_countdown(seconds),
            console=self.rich_console,
            refresh_per_second=1,
            transient=True,
        ) as live:
            while True:
                remaining = int(deadline - time.monotonic())
                if remaining <= 0:
                    return True
                live.update(self._render_countdown(remaining))
                if not await sleeper.sleep(min(1, remaining)):
                    return False
