"""
Record stores for users and expenses.

Each store wraps a SQLAlchemy session and is built per request from the
``get_db`` dependency. Missing records raise ``NotFound``; email conflicts
raise ``DuplicateEmail``.
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import Base, Expense, User
from errors import DuplicateEmail, NotFound
from security import DEFAULT_ROUNDS, hash_password, verify_password

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def save(self, record: ModelT) -> ModelT:
        self.db.add(record)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(record)
        return record

    def find_by_id(self, record_id: str) -> Optional[ModelT]:
        return self.db.get(self.model, record_id)

    def find_one(self, **filters) -> Optional[ModelT]:
        return self.db.query(self.model).filter_by(**filters).first()

    def find_all(self) -> List[ModelT]:
        return self.db.query(self.model).order_by(self.model.created_at).all()

    def delete(self, record: ModelT):
        self.db.delete(record)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def count(self) -> int:
        return self.db.query(self.model).count()


class UserStore(Repository[User]):
    model = User

    def __init__(self, db: Session, bcrypt_rounds: int = DEFAULT_ROUNDS):
        super().__init__(db)
        self.bcrypt_rounds = bcrypt_rounds

    def find_by_email(self, email: str) -> Optional[User]:
        return self.find_one(email=email)

    def get_user(self, user_id: str) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def list_all(self) -> List[User]:
        return self.find_all()

    def create_user(self, name: str, email: str, password: str) -> User:
        if self.find_by_email(email):
            raise DuplicateEmail()

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password, self.bcrypt_rounds),
        )
        return self._save_unique(user)

    def update_user(self, user_id: str, fields: dict) -> User:
        user = self.get_user(user_id)

        email = fields.get("email")
        if email is not None and email != user.email:
            if self.find_by_email(email):
                raise DuplicateEmail()
            user.email = email
        if fields.get("name") is not None:
            user.name = fields["name"]
        if fields.get("password") is not None:
            user.password_hash = hash_password(fields["password"], self.bcrypt_rounds)

        return self._save_unique(user)

    def delete_user(self, user_id: str):
        self.delete(self.get_user(user_id))

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    def _save_unique(self, user: User) -> User:
        # The unique index on email catches registrations that race past
        # the lookup above.
        try:
            return self.save(user)
        except IntegrityError:
            logger.info("Unique constraint rejected email %s", user.email)
            raise DuplicateEmail()


class ExpenseStore(Repository[Expense]):
    model = Expense

    def create(self, fields: dict) -> Expense:
        return self.save(Expense(**fields))

    def list_all(self) -> List[Expense]:
        return self.find_all()

    def get_by_id(self, expense_id: str) -> Expense:
        expense = self.find_by_id(expense_id)
        if expense is None:
            raise NotFound("Expense not found")
        return expense

    def delete_by_id(self, expense_id: str):
        self.delete(self.get_by_id(expense_id))
