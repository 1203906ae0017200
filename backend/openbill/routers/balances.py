"""Balances: per-member positions, who owes whom, member detail, dashboard."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from openbill.database import get_db
from openbill.dependencies import get_group_or_404
from openbill.schemas import (
    GroupBalances, MemberBalance, DebtItem, Counterparty, MemberDetail, MemberExpense, DashboardStats,
)
from openbill.services.balance_calculator import compute_member_totals
from openbill.services.debt_calculator import DebtRelation
from openbill.services.ledger import UnknownMember
from openbill.services.snapshot import load_snapshot

router = APIRouter(prefix="/balances", tags=["balances"])


def _counterparties(pairs: list[tuple[str, float]]) -> list[Counterparty]:
    return [Counterparty(name=name, amount=round(amount, 2)) for name, amount in pairs]


@router.get("/{team_code}", response_model=GroupBalances)
def get_balances(team_code: str, db: Session = Depends(get_db)):
    group = get_group_or_404(db, team_code)
    snapshot, records = load_snapshot(db, group)

    totals = compute_member_totals(snapshot, records)
    debts = DebtRelation.from_records(snapshot, records)
    return GroupBalances(
        team_code=snapshot.team_code,
        members=list(snapshot.members),
        balances=[
            MemberBalance(
                member=t.member,
                paid=round(t.paid, 2),
                owed=round(t.owed, 2),
                balance=round(t.balance, 2),
            )
            for t in totals
        ],
        debts=[
            DebtItem(debtor=d, creditor=c, amount=round(amt, 2))
            for d, c, amt in debts.entries()
        ],
    )


@router.get("/{team_code}/members/{member}", response_model=MemberDetail)
def get_member_detail(team_code: str, member: str, db: Session = Depends(get_db)):
    group = get_group_or_404(db, team_code)
    snapshot, records = load_snapshot(db, group)

    debts = DebtRelation.from_records(snapshot, records)
    try:
        creditors = debts.creditors_of(member)
        debtors = debts.debtors_of(member)
    except UnknownMember as e:
        raise HTTPException(status_code=404, detail=str(e))
    totals = compute_member_totals(snapshot, records)[snapshot.index_of(member)]

    involved = [r for r in records if member in r.split_between or r.paid_by == member]
    return MemberDetail(
        team_code=snapshot.team_code,
        member=member,
        paid=round(totals.paid, 2),
        owed=round(totals.owed, 2),
        balance=round(totals.balance, 2),
        creditors=_counterparties(creditors),
        debtors=_counterparties(debtors),
        total_to_pay=round(sum(amt for _, amt in creditors), 2),
        total_to_receive=round(sum(amt for _, amt in debtors), 2),
        expenses=[
            MemberExpense(
                id=r.id,
                description=r.description,
                amount=r.amount,
                paid_by=r.paid_by,
                split_count=len(r.split_between),
                member_share=round(r.share, 2) if member in r.split_between else 0.0,
                created_at=r.created_at,
            )
            for r in involved
        ],
    )


@router.get("/{team_code}/dashboard", response_model=DashboardStats)
def get_dashboard(team_code: str, db: Session = Depends(get_db)):
    group = get_group_or_404(db, team_code)
    snapshot, records = load_snapshot(db, group)

    total = sum(r.amount for r in records)
    member_count = len(snapshot)
    return DashboardStats(
        total_expenses=round(total, 2),
        expense_count=len(records),
        member_count=member_count,
        per_person_share=round(total / member_count, 2) if member_count else 0.0,
    )
