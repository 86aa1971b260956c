class ExpenseException(Exception):
    pass


class ExpenseNotFoundError(ExpenseException):
    pass


class ExpenseValidationError(ExpenseException):
    pass
