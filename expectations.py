"""Expected controller action calls and their argument expressions.

An expectation is recorded with :func:`expect`::

    expect(ProductsController).show(id="5")

Each argument becomes one node of a small closed expression tree. Plain
values are :class:`Literal`, values read from test state through
:func:`captured` are :class:`CapturedValue`, and anything that cannot be
reduced to a concrete value is :class:`Unsupported`. :func:`convert` wraps
either of the first two in a type conversion.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from utils import strip_controller_suffix


class Controller:
    """Base class for controllers that routes can dispatch to."""


@dataclass(frozen=True, slots=True)
class Literal:
    value: Any


@dataclass(frozen=True, slots=True)
class CapturedValue:
    value: Any
    source: str = ""


@dataclass(frozen=True, slots=True)
class Unsupported:
    description: str


Expression = Union[Literal, CapturedValue, Unsupported]
EXPRESSION_TYPES = (Literal, CapturedValue, Unsupported)


def captured(getter: Callable[[], Any], source: str = "") -> CapturedValue:
    """Read a value from test state once, when the expectation is built."""
    return CapturedValue(value=getter(), source=source or getattr(getter, "__name__", ""))


def as_expression(argument: Any) -> Expression:
    if isinstance(argument, EXPRESSION_TYPES):
        return argument
    if callable(argument):
        return Unsupported(f"callable argument {argument!r}; wrap it with captured()")
    return Literal(argument)


def convert(argument: Any, to_type: Callable[[Any], Any]) -> Expression:
    node = as_expression(argument)
    if isinstance(node, Literal):
        return Literal(to_type(node.value))
    if isinstance(node, CapturedValue):
        return CapturedValue(value=to_type(node.value), source=node.source)
    return node


def expected_string(node: Expression) -> str | None:
    """Stringify a literal or captured node; ``None`` stays ``None``."""
    if isinstance(node, Unsupported):
        raise TypeError("unsupported expressions have no concrete value")
    if node.value is None:
        return None
    return str(node.value)


def _require_controller(controller: Any) -> None:
    if not (isinstance(controller, type) and issubclass(controller, Controller)):
        raise TypeError(f"{controller!r} is not a Controller subclass")


def _action_signature(controller: type, action: str) -> inspect.Signature:
    method = getattr(controller, action, None)
    if method is None or not callable(method):
        raise TypeError(f"{controller.__name__} has no action {action!r}")

    signature = inspect.signature(method)
    raw = inspect.getattr_static(controller, action)
    if not isinstance(raw, (staticmethod, classmethod)):
        parameters = list(signature.parameters.values())[1:]
        signature = signature.replace(parameters=parameters)

    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            raise TypeError(
                f"{controller.__name__}.{action} takes *{parameter.name}; "
                "variadic parameters cannot be mapped to route values"
            )
    return signature


@dataclass(frozen=True, slots=True)
class ActionCall:
    controller: type
    action: str
    arguments: tuple[tuple[str, Expression], ...] = ()

    @property
    def expected_controller(self) -> str:
        return strip_controller_suffix(self.controller.__name__)

    @classmethod
    def bind(cls, controller: type, action: str, *args: Any, **kwargs: Any) -> ActionCall:
        _require_controller(controller)
        signature = _action_signature(controller, action)
        try:
            bound = signature.bind(*args, **kwargs)
        except TypeError as exc:
            raise TypeError(f"cannot bind arguments for {controller.__name__}.{action}: {exc}") from exc
        bound.apply_defaults()
        arguments = tuple((name, as_expression(value)) for name, value in bound.arguments.items())
        return cls(controller=controller, action=action, arguments=arguments)

    def __str__(self) -> str:
        rendered = ", ".join(f"{name}={node!r}" for name, node in self.arguments)
        return f"{self.controller.__name__}.{self.action}({rendered})"


class _ActionRecorder:
    __slots__ = ("_controller",)

    def __init__(self, controller: type) -> None:
        _require_controller(controller)
        self._controller = controller

    def __getattr__(self, action: str) -> Callable[..., ActionCall]:
        if action.startswith("_"):
            raise AttributeError(action)
        controller = self._controller
        # Unknown actions fail at attribute access.
        _action_signature(controller, action)

        def record(*args: Any, **kwargs: Any) -> ActionCall:
            return ActionCall.bind(controller, action, *args, **kwargs)

        return record


def expect(controller: type) -> _ActionRecorder:
    return _ActionRecorder(controller)
