from orders_api.common.result import Result, ResultErrorType
from orders_api.common.paging import PagedResult

__all__ = ["Result", "ResultErrorType", "PagedResult"]
