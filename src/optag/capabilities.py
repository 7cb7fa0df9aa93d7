"""
Operator capabilities for host values.

A class opts into an operator by tagging a method::

    class Vector:
        @operator("+")
        def add(self, other): ...

        @unary_operator("-")
        def negate(self): ...

        @bracket_operator("[", "]")
        def item(self, *indices): ...

        @static_operator("*")
        def scale(left, right): ...

Instance operators receive the other operand (binary), nothing (unary) or the
call arguments (bracket). Static operators receive ``(left, right)`` for
binary symbols and ``(callee, args)`` for brackets.

Types the caller does not own (including primitives) get static operators
through an OperatorRegistry.
"""

from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from .operators import OperatorKind

F = TypeVar("F", bound=Callable[..., Any])

OperatorKey = Tuple[OperatorKind, str]

_INSTANCE_ATTR = "__optag_operators__"
_STATIC_ATTR = "__optag_static_operators__"


def _tag(fn: Callable[..., Any], attr: str, key: OperatorKey) -> None:
    keys = getattr(fn, attr, ())
    setattr(fn, attr, keys + (key,))


def operator(symbol: str, *, kind: OperatorKind = OperatorKind.BINARY) -> Callable[[F], F]:
    """Marks a method as the instance implementation of ``symbol``."""

    def decorator(fn: F) -> F:
        _tag(fn, _INSTANCE_ATTR, (kind, symbol))
        return fn

    return decorator


def unary_operator(symbol: str) -> Callable[[F], F]:
    return operator(symbol, kind=OperatorKind.UNARY)


def bracket_operator(open_symbol: str, close_symbol: str) -> Callable[[F], F]:
    return operator(open_symbol + close_symbol, kind=OperatorKind.BRACKET)


def _check_static_kind(kind: OperatorKind) -> None:
    if kind == OperatorKind.UNARY:
        raise ValueError("Unary operators can only be implemented on instances")


def static_operator(
    symbol: str, *, kind: OperatorKind = OperatorKind.BINARY
) -> Callable[[Callable[..., Any]], staticmethod]:
    """
    Marks a function in a class body as the type-level implementation of
    ``symbol``. The function is wrapped in ``staticmethod``.
    """
    _check_static_kind(kind)

    def decorator(fn: Callable[..., Any]) -> staticmethod:
        func = fn.__func__ if isinstance(fn, staticmethod) else fn
        _tag(func, _STATIC_ATTR, (kind, symbol))
        return staticmethod(func)

    return decorator


def find_instance_operator(
    value: Any, kind: OperatorKind, symbol: str
) -> Optional[Callable[..., Any]]:
    """Returns the bound instance method implementing ``symbol`` on ``value``."""
    for klass in type(value).__mro__:
        for name, attr in vars(klass).items():
            if (kind, symbol) in getattr(attr, _INSTANCE_ATTR, ()):
                return getattr(value, name)
    return None


def _find_class_static(cls: type, key: OperatorKey) -> Optional[Callable[..., Any]]:
    for klass in cls.__mro__:
        for attr in vars(klass).values():
            if isinstance(attr, staticmethod) and key in getattr(
                attr.__func__, _STATIC_ATTR, ()
            ):
                return attr.__func__
    return None


class OperatorRegistry:
    """
    Type-level operator functions keyed by ``(type, kind, symbol)``.

    Lookups follow the MRO, so an entry for a base class also serves its
    subclasses.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[type, OperatorKind, str], Callable[..., Any]] = {}

    def register(
        self,
        cls: type,
        symbol: str,
        fn: Optional[Callable[..., Any]] = None,
        *,
        kind: OperatorKind = OperatorKind.BINARY,
    ) -> Any:
        """
        Registers ``fn`` as the static operator for ``symbol`` on ``cls``.

        Without ``fn`` this returns a decorator.
        """
        _check_static_kind(kind)

        if fn is None:

            def decorator(func: F) -> F:
                self._entries[(cls, kind, symbol)] = func
                return func

            return decorator

        self._entries[(cls, kind, symbol)] = fn
        return fn

    def unregister(
        self, cls: type, symbol: str, *, kind: OperatorKind = OperatorKind.BINARY
    ) -> None:
        self._entries.pop((cls, kind, symbol), None)

    def lookup(
        self, cls: type, kind: OperatorKind, symbol: str
    ) -> Optional[Callable[..., Any]]:
        for klass in cls.__mro__:
            fn = self._entries.get((klass, kind, symbol))
            if fn is not None:
                return fn
        return None

    def copy(self) -> "OperatorRegistry":
        registry = OperatorRegistry()
        registry._entries = dict(self._entries)
        return registry

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Tuple[type, str]) -> bool:
        cls, symbol = key
        return self.lookup(cls, OperatorKind.BINARY, symbol) is not None


def find_type_operator(
    cls: type,
    kind: OperatorKind,
    symbol: str,
    registry: Optional[OperatorRegistry] = None,
) -> Optional[Callable[..., Any]]:
    """
    Returns the type-level implementation of ``symbol`` for ``cls``.

    Static operators declared in the class body win over registry entries.
    """
    fn = _find_class_static(cls, (kind, symbol))
    if fn is None and registry is not None:
        fn = registry.lookup(cls, kind, symbol)
    return fn
