import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse

from auth import get_current_user
from crud import ExpenseStore
from dependencies import get_expense_store, get_receipt_store
from receipts import ReceiptStore
from schemas import ExpenseCreate, ExpenseResponse

logger = logging.getLogger(__name__)

# Every route here needs a valid token, but expenses are not tied to the
# user who created them: any authenticated caller sees and deletes them all.
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.post(
    "/expenses",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_expense(
    expense: ExpenseCreate,
    expenses: ExpenseStore = Depends(get_expense_store),
    receipts: ReceiptStore = Depends(get_receipt_store),
):
    received = expense.model_dump(exclude_unset=True, by_alias=True)
    logger.info("Received expense with fields: %s", ", ".join(received))

    fields = expense.model_dump(exclude={"receipt_image"})
    if expense.receipt_image:
        fields["receipt_image"] = await receipts.ingest(expense.receipt_image)
    else:
        logger.info("No receipt image received in payload")

    return expenses.create(fields)


@router.get("/expenses", response_model=list[ExpenseResponse])
async def get_expenses(expenses: ExpenseStore = Depends(get_expense_store)):
    return expenses.list_all()


@router.get("/expenses/uploads/{filename}")
async def get_receipt_image(
    filename: str, receipts: ReceiptStore = Depends(get_receipt_store)
):
    logger.info("Fetching receipt image %s", filename)
    return FileResponse(receipts.retrieve(filename))


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: str, expenses: ExpenseStore = Depends(get_expense_store)
):
    return expenses.get_by_id(expense_id)


@router.delete("/expenses/{expense_id}")
async def delete_expense(
    expense_id: str, expenses: ExpenseStore = Depends(get_expense_store)
):
    expenses.delete_by_id(expense_id)
    return {"message": "Expense deleted successfully"}
