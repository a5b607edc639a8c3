from datetime import date, datetime
from enum import Enum
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel

from .exceptions import SerializationError


class RequestSerializer:
    """
    Converts request models into the pieces a request executor sends:
    an expanded path, a flat query mapping and a JSON body envelope.

    Architectural Note:
    -------------------
    The API takes nested list filters as bracketed query keys
    (``created_at[gte]=...``) and write bodies wrapped in a resource key
    (``{"customers": {...}}``). Request models stay plain pydantic models and
    this class applies those wire conventions on the way out.
    """

    def expand_path(self, template: str, url_params: dict[str, Any] | None = None) -> str:
        """
        Substitutes ``:name`` placeholders in a path template.

        E.g.: ("/customers/:identity", {"identity": "CU1"}) -> "/customers/CU1"
        """
        path = template
        # Longest names first so ":id" never clobbers part of ":identity"
        for name in sorted(url_params or {}, key=len, reverse=True):
            value = self._stringify(url_params[name])  # type: ignore[index]
            path = path.replace(f":{name}", quote(value, safe=""))
        return path

    def to_query(self, request: BaseModel | None) -> dict[str, str]:
        """
        Flattens a request model into query parameters.

        Fields set to None are omitted; nested models become ``outer[inner]``.
        """
        if request is None:
            return {}
        params: dict[str, str] = {}
        self._flatten(request, prefix=None, into=params)
        return params

    def to_body(self, payload_key: str, request: BaseModel | None) -> dict[str, Any]:
        """Wraps a request model in its resource envelope for a write request."""
        if request is None:
            return {payload_key: {}}
        try:
            data = request.model_dump(mode="json", by_alias=True, exclude_none=True)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Failed to serialize {type(request).__name__} body. error={e!s}", original_error=e
            ) from e
        return {payload_key: data}

    def _flatten(self, model: BaseModel, prefix: str | None, into: dict[str, str]) -> None:
        for field_name, field_info in type(model).model_fields.items():
            if field_info.exclude:
                continue
            value = getattr(model, field_name)
            if value is None:
                continue

            name = field_info.alias or field_name
            key = f"{prefix}[{name}]" if prefix else name

            if isinstance(value, BaseModel):
                self._flatten(value, prefix=key, into=into)
            else:
                into[key] = self._stringify(value)

    def _stringify(self, value: Any) -> str:
        """
        Renders a scalar (or list of scalars) the way the API expects it.

        Converts:
        - bool -> "true" / "false"
        - Enum -> value
        - datetime/date -> ISO 8601 string
        - list/tuple -> comma-separated values
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, Enum):
            return str(value.value)
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, (list, tuple)):
            return ",".join(self._stringify(v) for v in value)
        if isinstance(value, (str, int, float)):
            return str(value)
        raise SerializationError(f"Unsupported parameter value {value!r} of type {type(value).__name__}")
