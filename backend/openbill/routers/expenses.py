"""Expenses: create, list, get, delete, export."""
import csv
import io
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from openbill.database import get_db
from openbill.dependencies import get_group_or_404
from openbill.models import Expense
from openbill.schemas import ExpenseCreate, ExpenseResponse
from openbill.services.ledger import ExpenseRecord, InvalidRecord, validate_record
from openbill.services.snapshot import group_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _expense_response(exp: Expense) -> ExpenseResponse:
    return ExpenseResponse(
        id=exp.id,
        team_code=exp.group.team_code,
        description=exp.description,
        amount=exp.amount,
        paid_by=exp.payer.name,
        split_between=[p.name for p in exp.participants],
        created_at=exp.created_at,
    )


@router.post("", response_model=ExpenseResponse)
def create_expense(data: ExpenseCreate, db: Session = Depends(get_db)):
    group = get_group_or_404(db, data.team_code)
    description = data.description.strip()
    if not description:
        raise HTTPException(status_code=400, detail="Description is required")

    members = {m.name: m for m in group.members}
    # no explicit split means everyone currently in the group
    split_names = [n.strip() for n in data.split_between or []] or list(members)
    candidate = ExpenseRecord(
        id=0,
        description=description,
        amount=data.amount,
        paid_by=data.paid_by.strip(),
        split_between=tuple(split_names),
    )
    try:
        validate_record(group_snapshot(group), candidate)
    except InvalidRecord as e:
        raise HTTPException(status_code=400, detail=e.reason)

    expense = Expense(
        group_id=group.id,
        payer_id=members[candidate.paid_by].id,
        amount=candidate.amount,
        description=description,
    )
    expense.participants = [members[n] for n in candidate.split_between]
    db.add(expense)
    db.commit()
    db.refresh(expense)
    logger.info(
        "Added expense %s to %s: %.2f paid by %s, split %d ways",
        expense.id, group.team_code, expense.amount, candidate.paid_by, len(candidate.split_between),
    )
    return _expense_response(expense)


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(
    team_code: str,
    search: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    group = get_group_or_404(db, team_code)
    q = db.query(Expense).filter(Expense.group_id == group.id)

    if search:
        escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        q = q.filter(Expense.description.ilike(f"%{escaped}%", escape="\\"))

    expenses = (
        q.order_by(Expense.created_at.desc(), Expense.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return [_expense_response(e) for e in expenses]


@router.get("/export")
def export_expenses(team_code: str, db: Session = Depends(get_db)):
    group = get_group_or_404(db, team_code)
    expenses = (
        db.query(Expense)
        .filter(Expense.group_id == group.id)
        .order_by(Expense.created_at.desc(), Expense.id.desc())
        .all()
    )

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Date", "Description", "Amount", "Paid By", "Split Between", "Share"])
    for e in expenses:
        date_str = e.created_at.strftime("%Y-%m-%d %H:%M") if e.created_at else ""
        split = [p.name for p in e.participants]
        writer.writerow([
            date_str,
            e.description,
            f"{e.amount:.2f}",
            e.payer.name,
            ", ".join(split),
            f"{e.amount / len(split):.2f}" if split else "",
        ])

    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=expenses-{group.team_code}.csv"},
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return _expense_response(expense)


@router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    team_code = expense.group.team_code
    db.delete(expense)
    db.commit()
    logger.info("Deleted expense %s from %s", expense_id, team_code)
