import random
from typing import Iterator

from better_proxy import Proxy

from route_manager import RouteManager
from src.api import PharosAPIClient, SessionAuthenticator, TaskVerifier
from src.exceptions.api_exceptions import APIAuthError, APIClientError
from src.exceptions.custom_exceptions import ProviderError
from src.logger import AsyncLogger
from src.models import (
    Account,
    ActionGroup,
    ActionKind,
    Config,
    Session,
    UserPoints,
    WalletReport,
)
from src.provider_factory import ProviderFactory
from src.receipt_waiter import ReceiptWaiter
from src.task_manager import ActionExecutor
from src.tasks import DailyRewardsModule
from src.utils.sleeper import CancellableSleeper
from src.utils.utils import random_sleep


class Scheduler(AsyncLogger):
    """
    One pass of one wallet.

    Order of a pass: proxy, login, points, daily rewards, provider, route,
    actions (each one verified and followed by a random delay), points again.
    A failed login or a fatal provider error skips the wallet for this cycle.
    """

    def __init__(
        self,
        config: Config,
        sleeper: CancellableSleeper,
        provider_factory: ProviderFactory | None = None,
        receipt_waiter: ReceiptWaiter | None = None,
        route_manager: RouteManager | None = None,
        api_client_cls: type[PharosAPIClient] = PharosAPIClient,
        executor_cls: type[ActionExecutor] = ActionExecutor,
        rng: random.Random | None = None,
    ) -> None:
        AsyncLogger.__init__(self)
        self.config = config
        self.policy = config.policy
        self.sleeper = sleeper
        self.provider_factory = provider_factory or ProviderFactory(
            rpc_url=config.rpc_url,
            chain_id=config.chain_config.id,
            sleeper=sleeper,
            max_attempts=self.policy.provider_max_attempts,
            retry_delay=self.policy.provider_retry_delay,
            outage_delay=self.policy.provider_outage_delay,
        )
        self.receipt_waiter = receipt_waiter or ReceiptWaiter(
            sleeper=sleeper,
            max_attempts=self.policy.receipt_max_attempts,
            poll_interval=self.policy.receipt_poll_interval,
        )
        self.route_manager = route_manager or RouteManager()
        self.api_client_cls = api_client_cls
        self.executor_cls = executor_cls
        self.rng = rng or random.Random()

    def pick_proxy(self) -> Proxy | None:
        if not self.config.proxies:
            return None
        return self.rng.choice(self.config.proxies)

    @staticmethod
    def _iter_actions(route: list[ActionGroup]) -> Iterator[ActionKind]:
        for group in route:
            for _ in range(group.count):
                yield group.kind

    async def _read_points(self, api: PharosAPIClient, session: Session) -> UserPoints | None:
        try:
            return await api.get_profile(session)
        except APIClientError as error:
            await self.logger_msg(
                msg=f"Failed to read points: {error}", type_msg="warning",
                address=session.address,
                class_name=self.__class__.__name__, method_name="_read_points"
            )
            return None

    async def _run_daily_tasks(self, api: PharosAPIClient, session: Session) -> None:
        daily = DailyRewardsModule(api, session)
        for task in self.policy.daily_tasks:
            if self.sleeper.cancelled:
                return
            await daily.run(task)

    async def process_wallet(self, index: int, total: int, account: Account) -> WalletReport:
        address = account.address
        report = WalletReport(address=address)
        proxy = self.pick_proxy()

        await self.logger_msg(
            msg=f"[{index}/{total}] Processing wallet"
                f"{f' via {proxy.host}:{proxy.port}' if proxy else ''}",
            type_msg="info", address=address
        )

        async with self.api_client_cls(self.config.api_url, proxy) as api:
            try:
                session = await SessionAuthenticator(api, self.config.invite_code).login(account)
            except APIAuthError as error:
                await self.logger_msg(
                    msg=f"[{index}/{total}] Login failed, skipping wallet: {error}",
                    type_msg="error", address=address,
                    class_name=self.__class__.__name__, method_name="process_wallet"
                )
                report.skipped, report.reason = True, str(error)
                return report

            report.points_before = await self._read_points(api, session)
            await self._run_daily_tasks(api, session)

            try:
                wallet = await self.provider_factory.acquire_until_ready(account.keypair, proxy)
            except ProviderError as error:
                await self.logger_msg(
                    msg=f"[{index}/{total}] Provider unavailable, skipping wallet: {error}",
                    type_msg="error", address=address,
                    class_name=self.__class__.__name__, method_name="process_wallet"
                )
                report.skipped, report.reason = True, str(error)
                return report

            verifier = TaskVerifier(
                api=api,
                task_id=self.config.task_id,
                sleeper=self.sleeper,
                max_attempts=self.policy.verify_max_attempts,
                retry_delay=self.policy.verify_retry_delay,
            )

            try:
                executor = self.executor_cls(
                    wallet, self.config, self.receipt_waiter, self.sleeper, index, total
                )
                route = self.route_manager.create_route(
                    self.policy.quota, self.policy.shuffle_action_groups
                )
                total_actions = self.route_manager.total_actions(route)

                await self.logger_msg(
                    msg=f"[{index}/{total}] Route: "
                        f"{', '.join(f'{group.kind.value} x{group.count}' for group in route) or 'empty'}",
                    type_msg="info", address=address
                )

                delay = self.policy.delay_between_actions
                for action_index, kind in enumerate(self._iter_actions(route), start=1):
                    if self.sleeper.cancelled:
                        break

                    result = await executor.execute(kind, action_index, total_actions)
                    report.results.append(result)

                    if await verifier.verify(session, result.verification_hash):
                        report.verified += 1

                    await random_sleep(self.sleeper, address, delay.min, delay.max)
            finally:
                await wallet.close()

            report.points_after = await self._read_points(api, session)

        await self._log_summary(index, total, report)
        return report

    async def _log_summary(self, index: int, total: int, report: WalletReport) -> None:
        summary = (
            f"[{index}/{total}] Actions confirmed: {report.confirmed}/{len(report.results)}, "
            f"verified: {report.verified}"
        )
        delta = report.points_delta
        if delta is not None:
            summary += (
                f" | Points: {report.points_after.total_points} total "
                f"({delta.total_points:+d}), {report.points_after.task_points} task "
                f"({delta.task_points:+d})"
            )
        await self.logger_msg(msg=summary, type_msg="success", address=report.address)
