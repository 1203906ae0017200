"""Build immutable ledger inputs from stored rows."""
from sqlalchemy.orm import Session

from openbill.models import Group, Expense
from openbill.services.ledger import ExpenseRecord, GroupSnapshot


def group_snapshot(group: Group) -> GroupSnapshot:
    return GroupSnapshot(members=tuple(m.name for m in group.members), team_code=group.team_code)


def expense_record(exp: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=exp.id,
        description=exp.description,
        amount=exp.amount,
        paid_by=exp.payer.name,
        split_between=tuple(p.name for p in exp.participants),
        created_at=exp.created_at,
    )


def load_snapshot(db: Session, group: Group) -> tuple[GroupSnapshot, list[ExpenseRecord]]:
    """Membership and every expense of the group, read in one session."""
    expenses = (
        db.query(Expense)
        .filter(Expense.group_id == group.id)
        .order_by(Expense.created_at.desc(), Expense.id.desc())
        .all()
    )
    return group_snapshot(group), [expense_record(e) for e in expenses]
