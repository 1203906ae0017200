"""Who owes whom: gross debt matrix, pairwise netting, per-member queries.

Netting is pairwise only. A cycle such as A owes B, B owes C, C owes A
(equal amounts) stays as three debts even though the group is settled overall.
"""
from typing import Iterable

from openbill.services.ledger import ExpenseRecord, GroupSnapshot, validate_records

# Net amounts at or below this are floating-point noise, not debt.
EPSILON = 0.01

DebtMatrix = dict[tuple[int, int], float]


def build_gross_debts(group: GroupSnapshot, records: Iterable[ExpenseRecord]) -> DebtMatrix:
    """
    (debtor_index, creditor_index) -> accumulated unpaid share.
    Only pairs touched by some record are present; the payer's own share is skipped.
    """
    records = validate_records(group, records)
    gross: DebtMatrix = {}
    for r in records:
        creditor = group.index_of(r.paid_by)
        share = r.share
        for m in r.split_between:
            debtor = group.index_of(m)
            if debtor == creditor:
                continue
            gross[(debtor, creditor)] = gross.get((debtor, creditor), 0.0) + share
    return gross


def net_debts(group: GroupSnapshot, gross: DebtMatrix) -> DebtMatrix:
    """Cancel mutual obligations for every unordered pair; keep one direction above EPSILON."""
    net: DebtMatrix = {}
    n = len(group)
    for a in range(n):
        for b in range(a + 1, n):
            diff = gross.get((a, b), 0.0) - gross.get((b, a), 0.0)
            if diff > EPSILON:
                net[(a, b)] = diff
            elif diff < -EPSILON:
                net[(b, a)] = -diff
    return net


class DebtRelation:
    """Netted debts of one group snapshot, queryable per member."""

    def __init__(self, group: GroupSnapshot, net: DebtMatrix):
        self.group = group
        self._net = dict(net)

    @classmethod
    def from_records(cls, group: GroupSnapshot, records: Iterable[ExpenseRecord]) -> "DebtRelation":
        return cls(group, net_debts(group, build_gross_debts(group, records)))

    def __len__(self) -> int:
        return len(self._net)

    def amount(self, debtor: str, creditor: str) -> float:
        """Net amount debtor owes creditor, 0.0 when settled."""
        key = (self.group.index_of(debtor), self.group.index_of(creditor))
        return self._net.get(key, 0.0)

    def _sorted(self, pairs: list[tuple[int, float]]) -> list[tuple[str, float]]:
        # amounts equal to the cent tie, then member order decides
        pairs.sort(key=lambda p: (-round(p[1], 2), p[0]))
        return [(self.group.members[i], amt) for i, amt in pairs]

    def creditors_of(self, member: str) -> list[tuple[str, float]]:
        """Who `member` owes, largest first, ties in member order."""
        idx = self.group.index_of(member)
        return self._sorted([(c, amt) for (d, c), amt in self._net.items() if d == idx])

    def debtors_of(self, member: str) -> list[tuple[str, float]]:
        """Who owes `member`, largest first, ties in member order."""
        idx = self.group.index_of(member)
        return self._sorted([(d, amt) for (d, c), amt in self._net.items() if c == idx])

    def entries(self) -> list[tuple[str, str, float]]:
        members = self.group.members
        return [
            (members[d], members[c], amt)
            for (d, c), amt in sorted(self._net.items())
        ]
