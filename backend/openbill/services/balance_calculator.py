"""Net position per member: total paid minus total owed."""
from dataclasses import dataclass
from typing import Iterable

from openbill.services.ledger import ExpenseRecord, GroupSnapshot, validate_records


@dataclass(frozen=True)
class MemberTotals:
    member: str
    paid: float
    owed: float

    @property
    def balance(self) -> float:
        """Positive = should receive, negative = should pay."""
        return self.paid - self.owed


def compute_member_totals(group: GroupSnapshot, records: Iterable[ExpenseRecord]) -> list[MemberTotals]:
    """
    Returns one MemberTotals per group member, in member order.
    Raises InvalidRecord before any arithmetic if a record cannot be split.
    """
    records = validate_records(group, records)
    paid = [0.0] * len(group)
    owed = [0.0] * len(group)
    for r in records:
        paid[group.index_of(r.paid_by)] += r.amount
        share = r.share
        for m in r.split_between:
            owed[group.index_of(m)] += share
    return [
        MemberTotals(member=name, paid=paid[i], owed=owed[i])
        for i, name in enumerate(group.members)
    ]


def compute_balances(group: GroupSnapshot, records: Iterable[ExpenseRecord]) -> dict[str, float]:
    return {t.member: t.balance for t in compute_member_totals(group, records)}
