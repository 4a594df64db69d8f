"""
Validation collaborator.

Each validator wraps a pydantic "rules" model whose field validators raise
PydanticCustomError with a human-readable message. validate() returns those
messages (empty list when the request is valid) so services can report them
as a single Validation result.
"""

from typing import ClassVar, Generic, List, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticCustomError

RequestT = TypeVar("RequestT", bound=BaseModel)


def rule_violation(message: str) -> PydanticCustomError:
    return PydanticCustomError("rule_violation", message)


class RequestValidator(Generic[RequestT]):
    rules: ClassVar[Type[BaseModel]]

    def validate(self, request: RequestT) -> List[str]:
        try:
            self.rules.model_validate(request.model_dump())
        except ValidationError as exc:
            return [error["msg"] for error in exc.errors()]
        return []
