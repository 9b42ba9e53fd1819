from fastapi import Depends
from sqlalchemy.orm import Session

from config import Settings, get_settings
from crud import ExpenseStore, UserStore
from database import get_db
from receipts import ReceiptStore


def get_user_store(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> UserStore:
    return UserStore(db, bcrypt_rounds=settings.bcrypt_rounds)


def get_expense_store(db: Session = Depends(get_db)) -> ExpenseStore:
    return ExpenseStore(db)


def get_receipt_store(settings: Settings = Depends(get_settings)) -> ReceiptStore:
    return ReceiptStore(settings.upload_dir)
