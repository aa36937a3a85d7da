"""
=============================================================================
TYPED POST HANDLER
=============================================================================

Adapts ``handler(input) -> output`` into a request handler for POSTed JSON,
unmarshalling the body into a declared input type and marshalling the
output back.

=============================================================================
STATE MACHINE
=============================================================================

    START
      │
      ▼
    METHOD_CHECK ───────────────┐  405 Expected POST got PUT
      │                         │
      ▼                         │
    CONTENT_TYPE_CHECK ─────────┤  400 Missing Content-Type / Header ...
      │                         │
      ▼                         │
    BODY_PRESENT_CHECK ─────────┤  400 Required body missing
      │                         │
      ▼                         │
    CONTENT_LENGTH_CHECK ───────┤  411 / 400 Content-Length: 9 != ...
      │                         │
      ▼                         │
    DECODE ─────────────────────┤  400 Invalid app.Conversion: ...
      │                         │
      ▼                         │
    ACCEPT_CHECK ───────────────┤  400 Missing Accept / Header Accept ...
      │                         │
      ▼                         │
    INVOKE ─────────────────────┤  500 <handler failure message>
      │                         │
      ▼                         ▼
    ENCODE                  ERROR_RESPONSE_WRITTEN
      │
      ▼
    DONE   200 POST Result OK / 204 POST Result No Content

The response version is copied from the request before the first check.
An entity is attached on failure only when the rejection has a cause.

=============================================================================
"""

from typing import Any, Callable, Optional

from ..codec import MarshallContext, UnmarshallContext
from ..config import DEFAULT_CONFIG, HandlerConfig
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse
from .exchange import JsonExchange, Rejection


class PostRequestBodyHandler:
    """
    Typed JSON POST handler.

    Args:
        handler: Called once per accepted request with the typed input.
        input_type: Type the request body is unmarshalled into.
        output_type: Declared output type, named in 204 status messages.
        marshall_context: Converts the output to a JSON value.
        unmarshall_context: Converts the parsed body to ``input_type``.
        config: Error body and logging settings.
    """

    def __init__(
        self,
        handler: Callable[[Any], Any],
        input_type: Any,
        output_type: Any,
        marshall_context: MarshallContext,
        unmarshall_context: UnmarshallContext,
        config: HandlerConfig = DEFAULT_CONFIG,
    ):
        for name, value in (
            ("handler", handler),
            ("input_type", input_type),
            ("output_type", output_type),
            ("marshall_context", marshall_context),
            ("unmarshall_context", unmarshall_context),
        ):
            if value is None:
                raise TypeError(name)

        self.handler = handler
        self.input_type = input_type
        self.output_type = output_type
        self.marshall_context = marshall_context
        self.unmarshall_context = unmarshall_context
        self.config = config

    def __call__(self, request: HTTPRequest, response: HTTPResponse) -> None:
        self.accept(request, response)

    def accept(self, request: HTTPRequest, response: HTTPResponse) -> None:
        response.set_version(request.version)
        exchange = JsonExchange(request, response, self.config)

        rejection = self._process(exchange)
        if rejection is not None:
            exchange.reject(rejection)

    def _process(self, exchange: JsonExchange) -> Optional[Rejection]:
        method = exchange.post_or_rejection()
        if isinstance(method, Rejection):
            return method

        content_type = exchange.content_type_json_or_rejection()
        if isinstance(content_type, Rejection):
            return content_type

        body_text = exchange.body_text_or_rejection()
        if isinstance(body_text, Rejection):
            return body_text

        resource = exchange.resource_or_rejection(body_text, self.input_type, self.unmarshall_context)
        if isinstance(resource, Rejection):
            return resource

        accept = exchange.accept_json_or_rejection()
        if isinstance(accept, Rejection):
            return accept

        output = exchange.invoke(self.handler, resource)
        if isinstance(output, Rejection):
            return output

        return exchange.write_typed_output(output, self.output_type, self.marshall_context)

    def __repr__(self) -> str:
        return repr(self.handler)
