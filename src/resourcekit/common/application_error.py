"""
Structured errors identified by a stable numeric code.

Every structured error is an :class:`ApplicationError`; its kind is the
``code`` discriminant rather than a subclass. Kinds are declared once with
:meth:`ApplicationError.declare`, which returns a factory that both builds
errors and recognizes them:

    NotFound = ApplicationError.declare(
        -40000, lambda uri: ApplicationErrorLiteral(message=f"{uri} not found", data={"uri": uri})
    )

    try:
        raise NotFound(uri)
    except Exception as e:
        if NotFound.is_(e):
            ...
"""

from __future__ import annotations

from typing import Any, Callable, Generic, ParamSpec

from pydantic import BaseModel, Field

P = ParamSpec("P")


class ApplicationErrorLiteral(BaseModel):
    """The raw shape a kind's factory produces."""

    message: str
    data: dict[str, Any] = Field(default_factory=dict)
    stack: str | None = None


class ApplicationError(Exception):
    """An error carrying a numeric ``code`` and a structured ``data`` payload."""

    _declared: dict[int, ApplicationErrorKind[...]] = {}

    def __init__(
        self,
        code: int,
        message: str,
        data: dict[str, Any] | None = None,
        stack: str | None = None,
    ):
        self.code = code
        self.message = message
        self.data = data if data is not None else {}
        self.stack = stack
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ApplicationError(code={self.code}, message={self.message!r})"

    def to_json(self) -> dict[str, Any]:
        """Return a JSON-compatible dict; non-primitive payload values are stringified."""
        raw: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "data": {key: _to_primitive(value) for key, value in self.data.items()},
        }
        if self.stack is not None:
            raw["stack"] = self.stack
        return raw

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> ApplicationError:
        return cls(
            code=int(raw["code"]),
            message=str(raw.get("message", "")),
            data=dict(raw.get("data") or {}),
            stack=raw.get("stack"),
        )

    @classmethod
    def declare(
        cls, code: int, factory: Callable[P, ApplicationErrorLiteral]
    ) -> ApplicationErrorKind[P]:
        """
        Declare a new error kind.

        Raises:
            ValueError: If ``code`` has already been declared.
        """
        if code in cls._declared:
            raise ValueError(f"An application error for '{code}' code is already declared")
        kind = ApplicationErrorKind(code, factory)
        cls._declared[code] = kind
        return kind

    @classmethod
    def is_(cls, error: object) -> bool:
        return isinstance(error, ApplicationError)


class ApplicationErrorKind(Generic[P]):
    def __init__(self, code: int, factory: Callable[P, ApplicationErrorLiteral]):
        self.code = code
        self._factory = factory

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> ApplicationError:
        literal = self._factory(*args, **kwargs)
        return ApplicationError(self.code, literal.message, dict(literal.data), literal.stack)

    def is_(self, error: object) -> bool:
        """Return True if ``error`` is an ApplicationError of this kind."""
        return isinstance(error, ApplicationError) and error.code == self.code

    def __repr__(self) -> str:
        return f"ApplicationErrorKind(code={self.code})"


def _to_primitive(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_to_primitive(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _to_primitive(v) for k, v in value.items()}
    return str(value)
