from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_expense_service
from api.schemas import (
	ExpenseCreateRequest,
	ExpenseFilterParams,
	ExpenseListResponse,
	ExpenseResponse,
	ExpenseUpdateRequest,
)
from application.services import ExpenseService

router = APIRouter(prefix='/api/expenses', tags=['expenses'])


@router.post(
	'',
	response_model=ExpenseResponse,
	status_code=status.HTTP_201_CREATED,
	summary='Record an expense',
)
async def create_expense(
	body: ExpenseCreateRequest,
	service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
	expense = await service.create_expense(
		amount=body.amount,
		currency=body.currency,
		expense_date=body.date,
		source=body.source,
		category=body.category,
		description=body.description,
		parent_expense_id=body.parent_expense_id,
	)
	return ExpenseResponse.from_domain(expense)


@router.get(
	'',
	response_model=ExpenseListResponse,
	status_code=status.HTTP_200_OK,
	summary='List top-level expenses with their children, newest first',
)
async def list_expenses(
	filters: Annotated[ExpenseFilterParams, Query()],
	service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseListResponse:
	expenses, total = await service.list_expenses(
		page=filters.page,
		limit=filters.limit,
		date_from=filters.date_from,
		date_to=filters.date_to,
		category=filters.category,
		source=filters.source,
	)
	return ExpenseListResponse(
		data=[ExpenseResponse.from_domain(expense) for expense in expenses],
		total=total,
		page=filters.page,
		limit=filters.limit,
	)


@router.get(
	'/{expense_id}',
	response_model=ExpenseResponse,
	status_code=status.HTTP_200_OK,
	summary='Get an expense with its child expenses',
)
async def get_expense(
	expense_id: Annotated[str, Path(min_length=1)],
	service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
	expense = await service.get_expense(expense_id)
	return ExpenseResponse.from_domain(expense)


@router.patch(
	'/{expense_id}',
	response_model=ExpenseResponse,
	status_code=status.HTTP_200_OK,
	summary='Update an expense, re-resolving its rate when needed',
)
async def update_expense(
	expense_id: Annotated[str, Path(min_length=1)],
	body: ExpenseUpdateRequest,
	service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
	expense = await service.update_expense(
		expense_id,
		amount=body.amount,
		currency=body.currency,
		expense_date=body.date,
		source=body.source,
		category=body.category,
		description=body.description,
	)
	return ExpenseResponse.from_domain(expense)


@router.post(
	'/{expense_id}/children',
	response_model=ExpenseResponse,
	status_code=status.HTTP_201_CREATED,
	summary='Record a child expense under an existing expense',
)
async def create_child_expense(
	expense_id: Annotated[str, Path(min_length=1)],
	body: ExpenseCreateRequest,
	service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
	expense = await service.create_child_expense(
		expense_id,
		amount=body.amount,
		currency=body.currency,
		expense_date=body.date,
		source=body.source,
		category=body.category,
		description=body.description,
	)
	return ExpenseResponse.from_domain(expense)
