"""Immutable ledger inputs (group snapshot, expense records) and ledger errors."""
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

# Upper bound for a single expense; keeps group totals finite.
MAX_AMOUNT = 1e12


class LedgerError(Exception):
    """Base class for ledger computation errors."""


class InvalidRecord(LedgerError, ValueError):
    """An expense record that cannot be split: bad amount, empty split, or outsider."""

    def __init__(self, record_id, reason: str):
        self.record_id = record_id
        self.reason = reason
        super().__init__(reason)


class UnknownMember(LedgerError, KeyError):
    """A member name that is not part of the group."""

    def __init__(self, member: str):
        self.member = member
        super().__init__(member)

    def __str__(self) -> str:
        return f"Unknown member: {self.member}"


@dataclass(frozen=True)
class GroupSnapshot:
    """Ordered, de-duplicated member names of a group at computation time."""

    members: tuple[str, ...]
    team_code: str = ""
    _index: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        members = tuple(dict.fromkeys(self.members))
        object.__setattr__(self, "members", members)
        object.__setattr__(self, "_index", {name: i for i, name in enumerate(members)})

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, member) -> bool:
        return member in self._index

    def index_of(self, member: str) -> int:
        try:
            return self._index[member]
        except KeyError:
            raise UnknownMember(member) from None


@dataclass(frozen=True)
class ExpenseRecord:
    id: int
    description: str
    amount: float
    paid_by: str
    split_between: tuple[str, ...]
    created_at: Optional[datetime] = None

    def __post_init__(self):
        # duplicates collapse, first appearance wins
        object.__setattr__(self, "split_between", tuple(dict.fromkeys(self.split_between)))

    @property
    def share(self) -> float:
        """Amount each split member is responsible for."""
        if not self.split_between:
            raise InvalidRecord(self.id, "Expense must be split between at least one member")
        return self.amount / len(self.split_between)


def validate_record(group: GroupSnapshot, record: ExpenseRecord) -> None:
    """Raise InvalidRecord unless the record can be applied to this group."""
    amount = record.amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidRecord(record.id, "Amount must be a number")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidRecord(record.id, "Amount must be positive")
    if amount > MAX_AMOUNT:
        raise InvalidRecord(record.id, f"Amount must not exceed {MAX_AMOUNT:,.0f}")
    if not record.split_between:
        raise InvalidRecord(record.id, "Expense must be split between at least one member")
    if record.paid_by not in group:
        raise InvalidRecord(record.id, f"Payer {record.paid_by!r} is not a group member")
    outsiders = [m for m in record.split_between if m not in group]
    if outsiders:
        raise InvalidRecord(
            record.id,
            f"Split members must be group members: {', '.join(outsiders)}",
        )


def validate_records(group: GroupSnapshot, records: Iterable[ExpenseRecord]) -> list[ExpenseRecord]:
    """Validate every record up front so a computation never partially applies."""
    checked = list(records)
    for record in checked:
        validate_record(group, record)
    return checked
