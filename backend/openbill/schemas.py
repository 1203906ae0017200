"""Pydantic schemas for request/response."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# ----- Group -----
class GroupCreate(BaseModel):
    name: str
    member_name: str


class GroupJoin(BaseModel):
    team_code: str
    member_name: str


class GroupResponse(BaseModel):
    id: int
    name: str
    team_code: str
    members: list[str] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ----- Expense -----
class ExpenseBase(BaseModel):
    description: str
    amount: float
    paid_by: str


class ExpenseCreate(ExpenseBase):
    team_code: str
    split_between: Optional[list[str]] = None


class ExpenseResponse(ExpenseBase):
    id: int
    team_code: str
    split_between: list[str]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GroupDetail(BaseModel):
    group: GroupResponse
    expenses: list[ExpenseResponse]


# ----- Balances -----
class MemberBalance(BaseModel):
    member: str
    paid: float
    owed: float
    balance: float


class DebtItem(BaseModel):
    debtor: str
    creditor: str
    amount: float


class Counterparty(BaseModel):
    name: str
    amount: float


class GroupBalances(BaseModel):
    team_code: str
    members: list[str] = []
    balances: list[MemberBalance]
    debts: list[DebtItem]


class MemberExpense(BaseModel):
    id: int
    description: str
    amount: float
    paid_by: str
    split_count: int
    member_share: float
    created_at: Optional[datetime] = None


class MemberDetail(MemberBalance):
    team_code: str
    creditors: list[Counterparty]
    debtors: list[Counterparty]
    total_to_pay: float
    total_to_receive: float
    expenses: list[MemberExpense]


# ----- Dashboard -----
class DashboardStats(BaseModel):
    total_expenses: float
    expense_count: int
    member_count: int
    per_person_share: float
