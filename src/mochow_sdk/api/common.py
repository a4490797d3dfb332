"""Base models shared by every Mochow request and response."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from ..errors import ParamsError

if TYPE_CHECKING:
    from ..config import ClientConfiguration


class ApiModel(BaseModel):
    """Model serialized with the service's camelCase field names.

    Python attributes stay snake_case; either spelling is accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON body for this model; ``None`` fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ApiArgs(ApiModel):
    """Arguments of one API operation and how they map onto HTTP.

    Subclasses set ``resource`` (path segment after the API version), the
    ``http_method`` and the ``action`` passed as a bare query key
    (``/v1/table?create``).
    """

    http_method: ClassVar[str] = "POST"
    resource: ClassVar[str]
    action: ClassVar[str | None] = None
    has_body: ClassVar[bool] = True

    @classmethod
    def build(cls, **fields: Any) -> Self:
        """Validate ``fields`` into an args model, raising ParamsError on failure."""
        try:
            return cls(**fields)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or cls.__name__}: {error['msg']}"
                for error in exc.errors()
            )
            raise ParamsError(
                f"invalid {cls.__name__}: {problems}", context={"args": cls.__name__}
            ) from exc

    def url(self, config: ClientConfiguration) -> str:
        url = f"{config.base_url}/{self.resource}"
        return f"{url}?{self.action}" if self.action else url

    def body(self) -> dict[str, Any] | None:
        return self.to_wire() if self.has_body else None


class CommonResponse(ApiModel):
    """Envelope present in every response; ``code`` 0 means success."""

    code: int = 0
    msg: str = ""

    def __str__(self) -> str:
        return f"code: {self.code},  msg: {self.msg}"


__all__ = ["ApiArgs", "ApiModel", "CommonResponse"]
