import random

from src.models import ActionGroup, ActionKind, ActionQuota


class RouteManager:
    """Builds the order in which a wallet runs its action groups."""

    ROUTE_ORDER = (
        ActionKind.TRANSFER,
        ActionKind.SWAP,
        ActionKind.LIQUIDITY,
    )

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def create_route(self, quota: ActionQuota, shuffle: bool = False) -> list[ActionGroup]:
        route = [
            ActionGroup(kind=kind, count=getattr(quota, kind.value))
            for kind in self.ROUTE_ORDER
        ]

        if shuffle:
            self.rng.shuffle(route)

        return [group for group in route if group.count > 0]

    @staticmethod
    def total_actions(route: list[ActionGroup]) -> int:
        return sum(group.count for group in route)
