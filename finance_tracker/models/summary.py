from pydantic import BaseModel


class Summary(BaseModel):
    """
    Aggregate income/expense totals across all transactions.
    """
    total_income: float
    total_expenses: float
    net_balance: float
