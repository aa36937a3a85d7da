"""
=============================================================================
MIDDLEWARE BASE
=============================================================================

Middleware wraps a request handler, i.e. any callable taking
``(request, response)`` that writes into the response:

    class MyMiddleware(Middleware):
        def __call__(self, request, response, next):
            # before: inspect the request
            next(request, response)
            # after: inspect what the handler wrote

MiddlewarePipeline composes several around one handler, first added being
the outermost:

    handler = (MiddlewarePipeline()
        .add(LoggingMiddleware())
        .wrap(post_request_body(...)))

    handler(request, response)

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional
import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)


# A handler or an already wrapped handler
NextHandler = Callable[[HTTPRequest, HTTPResponse], None]


class Middleware(ABC):
    """Abstract base class for middleware."""

    @abstractmethod
    def __call__(self, request: HTTPRequest, response: HTTPResponse, next: NextHandler) -> None:
        """
        Process the request.

        Call ``next(request, response)`` to continue the chain; not calling
        it short-circuits, in which case the middleware must write the
        response itself.
        """

    @property
    def name(self) -> str:
        """Get the middleware name for logging."""
        return self.__class__.__name__


class MiddlewarePipeline:
    """Chains multiple middleware together with a final handler."""

    def __init__(self):
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        """Add middleware; first added = outermost. Returns self."""
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self

    def use(self, *middleware: Middleware) -> "MiddlewarePipeline":
        """Add several middleware at once."""
        for mw in middleware:
            self.add(mw)
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """
        Wrap a handler with all middleware in the pipeline.

        Wrapping happens in reverse so that [A, B, C] yields
        A → B → C → handler.
        """
        current = handler
        for middleware in reversed(self._middleware):
            current = self._create_wrapped_handler(middleware, current)
        return current

    def _create_wrapped_handler(self, middleware: Middleware, next_handler: NextHandler) -> NextHandler:
        def wrapped(request: HTTPRequest, response: HTTPResponse) -> None:
            middleware(request, response, next_handler)

        return wrapped

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self):
        return iter(self._middleware)


class FunctionMiddleware(Middleware):
    """
    Wraps a plain function as middleware.

        def tag(request, response, next):
            next(request, response)
            ...

        pipeline.add(FunctionMiddleware(tag))
    """

    def __init__(
        self,
        func: Callable[[HTTPRequest, HTTPResponse, NextHandler], None],
        name: Optional[str] = None,
    ):
        self._func = func
        self._name = name or func.__name__

    def __call__(self, request: HTTPRequest, response: HTTPResponse, next: NextHandler) -> None:
        self._func(request, response, next)

    @property
    def name(self) -> str:
        return self._name


def function_middleware(
    func: Callable[[HTTPRequest, HTTPResponse, NextHandler], None]
) -> FunctionMiddleware:
    """Decorator form of FunctionMiddleware."""
    return FunctionMiddleware(func)
