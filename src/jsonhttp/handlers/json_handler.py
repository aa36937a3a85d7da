"""
Untyped JSON handler.

Accepts any method, requires a body with a matching Content-Length, parses
it as a generic JSON value and hands it to the handler function. The
function's JSON value result becomes the response body; None becomes a 204.

    BODY_PRESENT_CHECK → CONTENT_LENGTH_CHECK → DECODE → INVOKE → ENCODE

Every rejection adds exactly one entity: a traceback dump when there is a
cause, otherwise an empty entity.
"""

from typing import Callable, Optional

from ..codec import JsonValue
from ..config import DEFAULT_CONFIG, HandlerConfig
from ..http.request import HTTPRequest
from ..http.response import HTTPEntity, HTTPResponse
from .exchange import JsonExchange, Rejection


def identity(entity: HTTPEntity) -> HTTPEntity:
    return entity


class JsonHandler:
    """
    Adapts ``handler(json_value) -> json_value`` into a request handler.

    Args:
        handler: Called once per accepted request with the parsed body.
        post: Rewrites the response entity before it is attached, e.g. to
              add headers. Runs for 200 and 204 responses only.
        config: Error body and logging settings.
    """

    def __init__(
        self,
        handler: Callable[[JsonValue], Optional[JsonValue]],
        post: Callable[[HTTPEntity], HTTPEntity] = identity,
        config: HandlerConfig = DEFAULT_CONFIG,
    ):
        if handler is None:
            raise TypeError("handler")
        if post is None:
            raise TypeError("post")

        self.handler = handler
        self.post = post
        self.config = config

    def __call__(self, request: HTTPRequest, response: HTTPResponse) -> None:
        self.handle(request, response)

    def handle(self, request: HTTPRequest, response: HTTPResponse) -> None:
        exchange = JsonExchange(request, response, self.config)

        rejection = self._process(exchange)
        if rejection is not None:
            exchange.reject(rejection, always_add_entity=True)

    def _process(self, exchange: JsonExchange) -> Optional[Rejection]:
        body_text = exchange.body_text_or_rejection()
        if isinstance(body_text, Rejection):
            return body_text

        value = exchange.json_or_rejection(body_text)
        if isinstance(value, Rejection):
            return value

        output = exchange.invoke(self.handler, value)
        if isinstance(output, Rejection):
            return output

        return exchange.write_json_output(output, self.post)

    def __repr__(self) -> str:
        return f"{self.handler!r} {self.post!r}"
