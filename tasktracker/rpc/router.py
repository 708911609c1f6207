import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from tasktracker.errors import InputValidationError, UnknownProcedureError

logger = logging.getLogger(__name__)

QUERY = 'query'
MUTATION = 'mutation'


@dataclass(frozen=True)
class Procedure:
    name: str
    kind: str
    resolver: Callable[..., Any]
    input_schema: Optional[type[BaseModel]] = None

    @property
    def http_method(self) -> str:
        return 'GET' if self.kind == QUERY else 'POST'

    def parse_input(self, raw: Optional[str]) -> Optional[BaseModel]:
        """Decode and validate the raw JSON input; nothing here touches the store."""
        if self.input_schema is None:
            return None
        if raw is None or not raw.strip():
            payload = None
        else:
            try:
                payload = json.loads(raw)
            except ValueError as exc:
                raise InputValidationError(f'Input is not valid JSON: {exc}') from exc
        try:
            return self.input_schema.model_validate(payload)
        except ValidationError as exc:
            raise InputValidationError.from_pydantic(exc) from exc

    def call(self, raw: Optional[str]) -> Any:
        data = self.parse_input(raw)
        if self.input_schema is None:
            return self.resolver()
        return self.resolver(data)


class Router:
    """Registry of named query and mutation procedures."""

    def __init__(self) -> None:
        self._procedures: dict[str, Procedure] = {}

    def query(self, name: str, input_schema: Optional[type[BaseModel]] = None):
        return self._register(name, QUERY, input_schema)

    def mutation(self, name: str, input_schema: type[BaseModel]):
        return self._register(name, MUTATION, input_schema)

    def _register(self, name, kind, input_schema):
        if name in self._procedures:
            raise ValueError(f'procedure {name!r} already registered')

        def decorator(fn):
            self._procedures[name] = Procedure(name, kind, fn, input_schema)
            return fn

        return decorator

    def get(self, name: str) -> Procedure:
        try:
            return self._procedures[name]
        except KeyError:
            raise UnknownProcedureError(name) from None
