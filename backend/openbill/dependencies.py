"""Shared lookups for routers."""
from fastapi import HTTPException
from sqlalchemy.orm import Session

from openbill.models import Group


def normalize_team_code(team_code: str) -> str:
    return team_code.strip().upper()


def get_group_or_404(db: Session, team_code: str) -> Group:
    group = db.query(Group).filter(Group.team_code == normalize_team_code(team_code)).first()
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")
    return group
