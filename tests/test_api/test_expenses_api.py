from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_expense_service
from api.main import app
from domain.exceptions.currency import ResolutionExhaustedError
from domain.exceptions.expense import ExpenseNotFoundError
from domain.models.currency import Currency
from domain.models.expense import Expense, ExpenseCategory, ExpenseSource

EXPENSE = Expense(
    id="exp-1",
    amount=Decimal("100.00"),
    currency=Currency.USD,
    exchange_rate=Decimal("38.0123"),
    rate_date=date(2024, 1, 5),
    amount_uah=Decimal("3801.23"),
    date=date(2024, 1, 6),
    source=ExpenseSource.CASH,
    category=ExpenseCategory.PARTS,
    description="Brake pads",
)

VALID_BODY = {
    "amount": 100.00,
    "currency": "usd",
    "date": "2024-01-06",
    "source": "CASH",
    "category": "PARTS",
    "description": "Brake pads",
}


@pytest.fixture
def mock_expense_service():
    mock_service = MagicMock()
    mock_service.create_expense = AsyncMock(return_value=EXPENSE)
    mock_service.create_child_expense = AsyncMock(return_value=EXPENSE)
    mock_service.get_expense = AsyncMock(return_value=EXPENSE)
    mock_service.update_expense = AsyncMock(return_value=EXPENSE)
    mock_service.list_expenses = AsyncMock(return_value=([EXPENSE], 1))
    return mock_service


@pytest.fixture
def client(mock_expense_service):
    app.dependency_overrides[get_expense_service] = lambda: mock_expense_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def test_create_expense(client, mock_expense_service):
    response = client.post("/api/expenses", json=VALID_BODY)

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == "exp-1"
    assert Decimal(str(data["amount_uah"])) == Decimal("3801.23")
    assert Decimal(str(data["exchange_rate"])) == Decimal("38.0123")
    assert data["rate_date"] == "2024-01-05"

    kwargs = mock_expense_service.create_expense.call_args.kwargs
    assert kwargs["currency"] == Currency.USD
    assert kwargs["expense_date"] == date(2024, 1, 6)
    assert kwargs["amount"] == Decimal("100.00")


@pytest.mark.parametrize("override", [
    {"amount": -5},
    {"amount": 1.234},
    {"currency": "GBP"},
    {"category": "FOOD"},
    {"date": "06.01.2024"},
    {"description": ""},
])
def test_create_expense_validation(client, mock_expense_service, override):
    response = client.post("/api/expenses", json={**VALID_BODY, **override})

    assert response.status_code == 422
    mock_expense_service.create_expense.assert_not_called()


def test_create_expense_rate_unavailable(client, mock_expense_service):
    mock_expense_service.create_expense.side_effect = ResolutionExhaustedError(
        "USD", date(2024, 1, 6), 10
    )

    response = client.post("/api/expenses", json=VALID_BODY)

    assert response.status_code == 503
    assert "Could not fetch exchange rate" in response.json()["detail"]


def test_get_expense(client):
    response = client.get("/api/expenses/exp-1")

    assert response.status_code == 200
    assert response.json()["children"] == []


def test_get_expense_not_found(client, mock_expense_service):
    mock_expense_service.get_expense.side_effect = ExpenseNotFoundError("Expense with ID x not found")

    response = client.get("/api/expenses/x")

    assert response.status_code == 404


def test_update_expense_passes_only_given_fields(client, mock_expense_service):
    response = client.patch("/api/expenses/exp-1", json={"amount": 50})

    assert response.status_code == 200
    args, kwargs = mock_expense_service.update_expense.call_args
    assert args == ("exp-1",)
    assert kwargs["amount"] == Decimal("50")
    assert kwargs["currency"] is None
    assert kwargs["expense_date"] is None


def test_create_child_expense(client, mock_expense_service):
    response = client.post("/api/expenses/exp-1/children", json=VALID_BODY)

    assert response.status_code == 201
    assert mock_expense_service.create_child_expense.call_args.args == ("exp-1",)


def test_list_expenses_defaults(client, mock_expense_service):
    response = client.get("/api/expenses")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["page"] == 1
    assert data["limit"] == 20
    assert [e["id"] for e in data["data"]] == ["exp-1"]
    mock_expense_service.list_expenses.assert_called_once_with(
        page=1, limit=20, date_from=None, date_to=None, category=None, source=None,
    )


def test_list_expenses_with_filters(client, mock_expense_service):
    response = client.get("/api/expenses", params={
        "page": 2,
        "limit": 5,
        "date_from": "2024-01-01",
        "date_to": "2024-01-31",
        "category": "PARTS",
        "source": "CASH",
    })

    assert response.status_code == 200
    assert response.json()["page"] == 2
    kwargs = mock_expense_service.list_expenses.call_args.kwargs
    assert kwargs["date_from"] == date(2024, 1, 1)
    assert kwargs["date_to"] == date(2024, 1, 31)
    assert kwargs["category"] == ExpenseCategory.PARTS
    assert kwargs["source"] == ExpenseSource.CASH


@pytest.mark.parametrize("params", [
    {"page": 0},
    {"limit": 0},
    {"limit": 101},
    {"category": "FOOD"},
    {"date_from": "01.01.2024"},
])
def test_list_expenses_validation(client, mock_expense_service, params):
    response = client.get("/api/expenses", params=params)

    assert response.status_code == 422
    mock_expense_service.list_expenses.assert_not_called()


def test_request_example_is_published_in_openapi(client):
    schemas = client.get("/openapi.json").json()["components"]["schemas"]

    assert schemas["ExpenseCreateRequest"]["example"]["currency"] == "USD"
    assert schemas["ExchangeRateResponse"]["example"]["source"] == "NBU"
