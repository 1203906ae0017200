"""Groups: create, join by team code, get with expenses."""
import logging
import secrets
import string

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from openbill.database import get_db
from openbill.dependencies import get_group_or_404
from openbill.models import Group, GroupMember, Expense
from openbill.schemas import GroupCreate, GroupJoin, GroupResponse, GroupDetail
from openbill.routers.expenses import _expense_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups", tags=["groups"])

TEAM_CODE_LENGTH = 8
TEAM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def _generate_team_code(db: Session) -> str:
    while True:
        code = "".join(secrets.choice(TEAM_CODE_ALPHABET) for _ in range(TEAM_CODE_LENGTH))
        if not db.query(Group).filter(Group.team_code == code).first():
            return code


def _group_response(group: Group) -> GroupResponse:
    return GroupResponse(
        id=group.id,
        name=group.name,
        team_code=group.team_code,
        members=[m.name for m in group.members],
        created_at=group.created_at,
    )


@router.post("", response_model=GroupResponse)
def create_group(data: GroupCreate, db: Session = Depends(get_db)):
    name = data.name.strip()
    member_name = data.member_name.strip()
    if not name or not member_name:
        raise HTTPException(status_code=400, detail="Group name and member name are required")
    group = Group(name=name, team_code=_generate_team_code(db))
    group.members = [GroupMember(name=member_name)]
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info("Created group %s (%s) for %s", group.team_code, group.name, member_name)
    return _group_response(group)


@router.post("/join", response_model=GroupResponse)
def join_group(data: GroupJoin, db: Session = Depends(get_db)):
    member_name = data.member_name.strip()
    if not member_name:
        raise HTTPException(status_code=400, detail="Member name is required")
    group = get_group_or_404(db, data.team_code)
    if member_name not in [m.name for m in group.members]:
        group.members.append(GroupMember(name=member_name))
        db.commit()
        db.refresh(group)
        logger.info("%s joined group %s", member_name, group.team_code)
    return _group_response(group)


@router.get("/{team_code}", response_model=GroupDetail)
def get_group(team_code: str, db: Session = Depends(get_db)):
    group = get_group_or_404(db, team_code)
    expenses = (
        db.query(Expense)
        .filter(Expense.group_id == group.id)
        .order_by(Expense.created_at.desc(), Expense.id.desc())
        .all()
    )
    return GroupDetail(
        group=_group_response(group),
        expenses=[_expense_response(e) for e in expenses],
    )
