"""
Middleware for command execution.

A middleware wraps a command handler: it receives the parsed input, the
execution context, the command metadata and a ``call_next`` continuation.
Calling ``call_next(patch)`` runs the rest of the chain with the context
extended by ``patch``; not calling it short-circuits the chain.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from .errors import BuilderConfigurationError

CallNext = Callable[..., Any]


class Context(Mapping[str, Any]):
    """
    Immutable execution context with attribute access.

    Contexts are never modified in place; ``extend()`` returns a new
    context with the patch shallow-merged over the current values.

    Attribute access falls back to the values only for names the class does
    not define, so fields named ``keys``, ``items``, ``values``, ``get`` or
    ``extend`` are reachable by item access alone.

    Example:
        >>> ctx = Context(logger=lg)
        >>> ctx2 = ctx.extend({"user": "joe"})
        >>> ctx2.user, "user" in ctx
        ('joe', False)
    """

    def __init__(self, values: Mapping[str, Any] | None = None, **fields: Any):
        data = dict(values or {})
        data.update(fields)
        self._values: Mapping[str, Any] = MappingProxyType(data)

    def extend(self, patch: Mapping[str, Any] | None = None, **fields: Any) -> Context:
        """Return a new context with ``patch`` and ``fields`` merged in."""
        if not patch and not fields:
            return self
        data = dict(self._values)
        data.update(patch or {})
        data.update(fields)
        return Context(data)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"context has no field '{name}'") from None

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Context({dict(self._values)!r})"


class Middleware(ABC):
    """Base class for command middleware."""

    def __init__(self, name: str | None = None) -> None:
        """
        Initialize the middleware.

        Args:
            name: Middleware name (defaults to class name)
        """
        self.name = name or self.__class__.__name__

    @abstractmethod
    def handle(
        self,
        parsed_input: Any,
        context: Context,
        metadata: Mapping[str, Any],
        call_next: CallNext,
    ) -> Any:
        """
        Process one command invocation.

        Args:
            parsed_input: Validated command input
            context: Current execution context
            metadata: Command metadata
            call_next: Continuation; ``call_next(patch)`` runs the rest of
                the chain with the context extended by ``patch``

        Returns:
            The command result (usually whatever call_next returned)
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"


class FunctionMiddleware(Middleware):
    """Middleware that wraps a plain function with the handle() signature."""

    def __init__(self, func: Callable[..., Any], name: str | None = None) -> None:
        super().__init__(name or getattr(func, "__name__", None))
        self._func = func

    def handle(
        self,
        parsed_input: Any,
        context: Context,
        metadata: Mapping[str, Any],
        call_next: CallNext,
    ) -> Any:
        return self._func(parsed_input, context, metadata, call_next)


def as_middleware(obj: Any) -> Middleware:
    """
    Coerce a Middleware instance or a plain callable to Middleware.

    Raises:
        BuilderConfigurationError: If obj is neither
    """
    if isinstance(obj, Middleware):
        return obj
    if callable(obj):
        return FunctionMiddleware(obj)
    raise BuilderConfigurationError(
        f"middleware must be a Middleware or callable, got {type(obj).__name__}"
    )


class MiddlewareChain:
    """
    A handler composed with an ordered sequence of middleware.

    The first middleware is outermost; the handler runs after the last
    middleware calls ``call_next``. The chain itself is callable with the
    handler's signature, so it can stand in for the handler.
    """

    def __init__(
        self,
        middleware: Sequence[Middleware],
        handler: Callable[..., Any],
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Initialize the chain.

        Args:
            middleware: Middleware in execution order
            handler: Terminal handler, called with keyword arguments
                ``parsed_input``, ``context`` and ``config``
            metadata: Command metadata handed to every middleware
        """
        self._middleware = tuple(middleware)
        self._handler = handler
        self._metadata: Mapping[str, Any] = MappingProxyType(dict(metadata or {}))

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        return self._middleware

    @property
    def handler(self) -> Callable[..., Any]:
        return self._handler

    def __call__(
        self, parsed_input: Any, context: Mapping[str, Any], config: Any = None
    ) -> Any:
        """Run the chain."""
        ctx = context if isinstance(context, Context) else Context(context)
        return self._invoke(0, parsed_input, ctx, config)

    def _invoke(
        self, index: int, parsed_input: Any, context: Context, config: Any
    ) -> Any:
        if index >= len(self._middleware):
            return self._handler(
                parsed_input=parsed_input, context=context, config=config
            )

        def call_next(patch: Mapping[str, Any] | None = None, **fields: Any) -> Any:
            return self._invoke(
                index + 1, parsed_input, context.extend(patch, **fields), config
            )

        return self._middleware[index].handle(
            parsed_input, context, self._metadata, call_next
        )


class MiddlewareBuilder:
    """Builder for creating middleware with fluent API."""

    def __init__(self, name: str):
        """
        Initialize the middleware builder.

        Args:
            name: Middleware name
        """
        self._name = name
        self._before: Callable | None = None
        self._after: Callable | None = None
        self._error_handler: Callable | None = None
        self._conditions: list[Callable] = []

    def before(self, func: Callable) -> MiddlewareBuilder:
        """
        Set the function run before the rest of the chain.

        Args:
            func: Signature: func(parsed_input, context) -> context patch or None
        """
        self._before = func
        return self

    def after(self, func: Callable) -> MiddlewareBuilder:
        """
        Set the function run on the chain's result.

        Args:
            func: Signature: func(result, parsed_input, context) -> result
        """
        self._after = func
        return self

    def on_error(self, func: Callable) -> MiddlewareBuilder:
        """
        Set the error handling function.

        Args:
            func: Signature: func(error, parsed_input, context) -> result
        """
        self._error_handler = func
        return self

    def when(self, condition: Callable) -> MiddlewareBuilder:
        """
        Add a condition for when this middleware should run.

        Args:
            condition: Signature: func(parsed_input, context, metadata) -> bool
        """
        self._conditions.append(condition)
        return self

    def build(self) -> BuiltMiddleware:
        """Build the middleware with all configured options."""
        return BuiltMiddleware(
            name=self._name,
            before=self._before,
            after=self._after,
            error_handler=self._error_handler,
            conditions=self._conditions,
        )


class BuiltMiddleware(Middleware):
    """Middleware implementation built by MiddlewareBuilder."""

    def __init__(
        self,
        name: str,
        before: Callable | None = None,
        after: Callable | None = None,
        error_handler: Callable | None = None,
        conditions: list[Callable] | None = None,
    ) -> None:
        super().__init__(name)
        self._before = before
        self._after = after
        self._error_handler = error_handler
        self._conditions = list(conditions or [])

    def handle(
        self,
        parsed_input: Any,
        context: Context,
        metadata: Mapping[str, Any],
        call_next: CallNext,
    ) -> Any:
        if not self._should_run(parsed_input, context, metadata):
            return call_next()

        try:
            patch = self._before(parsed_input, context) if self._before else None
            result = call_next(patch)
            if self._after:
                result = self._after(result, parsed_input, context)
            return result
        except Exception as e:
            if self._error_handler:
                return self._error_handler(e, parsed_input, context)
            raise

    def _should_run(
        self, parsed_input: Any, context: Context, metadata: Mapping[str, Any]
    ) -> bool:
        """Check if middleware should run based on conditions."""
        for condition in self._conditions:
            try:
                if not condition(parsed_input, context, metadata):
                    return False
            except Exception:
                # If condition fails, don't run middleware
                return False
        return True


class LoggingMiddleware(Middleware):
    """Built-in middleware that logs command start and completion."""

    def __init__(self, logger: Any = None) -> None:
        """
        Initialize logging middleware.

        Args:
            logger: Logger to use (default: the context's logger)
        """
        super().__init__("logging")
        self.logger = logger

    def handle(
        self,
        parsed_input: Any,
        context: Context,
        metadata: Mapping[str, Any],
        call_next: CallNext,
    ) -> Any:
        lg = self.logger or context.get("logger")
        command = context.get("command", "?")
        if lg:
            lg.debug("running command", extra={"command": command})

        start = time.perf_counter()
        result = call_next()

        if lg:
            lg.debug(
                "command finished",
                extra={
                    "command": command,
                    "elapsed_ms": round((time.perf_counter() - start) * 1000, 3),
                },
            )
        return result


def create_middleware_builder(name: str) -> MiddlewareBuilder:
    """
    Create a new middleware builder.

    Example:
        auth = (
            create_middleware_builder("auth")
            .before(lambda inp, ctx: {"user": lookup_user()})
            .build()
        )
    """
    return MiddlewareBuilder(name)


__all__ = [
    "BuiltMiddleware",
    "CallNext",
    "Context",
    "FunctionMiddleware",
    "LoggingMiddleware",
    "Middleware",
    "MiddlewareBuilder",
    "MiddlewareChain",
    "as_middleware",
    "create_middleware_builder",
]
