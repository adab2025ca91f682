from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


PLACEHOLDER_TX_HASH = "0x" + "0" * 64


class ActionKind(str, Enum):
    TRANSFER = "transfer"
    SWAP = "swap"
    LIQUIDITY = "liquidity"


class ActionStatus(str, Enum):
    CONFIRMED = "confirmed"
    UNCONFIRMED = "unconfirmed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ActionGroup:
    kind: ActionKind
    count: int


@dataclass(slots=True)
class PendingOperation:
    kind: ActionKind | str
    payload: dict[str, Any]
    nonce: int | None = None


@dataclass(frozen=True, slots=True)
class Receipt:
    tx_hash: str
    confirmed: bool
    status: int | None = None
    block_number: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.confirmed and self.status == 1


@dataclass(frozen=True, slots=True)
class ActionResult:
    kind: ActionKind
    status: ActionStatus
    tx_hash: str | None = None
    message: str = ""

    @property
    def verification_hash(self) -> str:
        return self.tx_hash or PLACEHOLDER_TX_HASH

    @classmethod
    def from_receipt(cls, kind: ActionKind, receipt: Receipt) -> "ActionResult":
        if receipt.succeeded:
            return cls(kind, ActionStatus.CONFIRMED, receipt.tx_hash)
        if receipt.confirmed:
            return cls(kind, ActionStatus.FAILED, receipt.tx_hash, "Transaction reverted")
        return cls(kind, ActionStatus.UNCONFIRMED, receipt.tx_hash, "Receipt not found")

    @classmethod
    def failed(cls, kind: ActionKind, message: str, tx_hash: str | None = None) -> "ActionResult":
        return cls(kind, ActionStatus.FAILED, tx_hash, message)


@dataclass(frozen=True, slots=True)
class Session:
    address: str
    token: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def auth_header(self) -> dict[str, str]:
        return {"authorization": f"Bearer {self.token}"}


@dataclass(frozen=True, slots=True)
class UserPoints:
    task_points: int = 0
    total_points: int = 0

    @classmethod
    def from_profile(cls, data: dict[str, Any]) -> "UserPoints":
        payload = data.get("data")
        user_info = payload.get("user_info") if isinstance(payload, dict) else None
        if not isinstance(user_info, dict):
            user_info = {}
        return cls(
            task_points=int(user_info.get("TaskPoints", 0) or 0),
            total_points=int(user_info.get("TotalPoints", 0) or 0),
        )

    def __sub__(self, other: "UserPoints") -> "UserPoints":
        return UserPoints(
            task_points=self.task_points - other.task_points,
            total_points=self.total_points - other.total_points,
        )


@dataclass(slots=True)
class WalletReport:
    address: str
    skipped: bool = False
    reason: str = ""
    points_before: UserPoints | None = None
    points_after: UserPoints | None = None
    results: list[ActionResult] = field(default_factory=list)
    verified: int = 0

    @property
    def confirmed(self) -> int:
        return sum(1 for result in self.results if result.status is ActionStatus.CONFIRMED)

    @property
    def points_delta(self) -> UserPoints | None:
        if self.points_before is None or self.points_after is None:
            return None
        return self.points_after - self.points_before
