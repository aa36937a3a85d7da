"""
=============================================================================
PER-REQUEST EXCHANGE
=============================================================================

JsonExchange holds one in-flight request/response pair and exposes the
validation steps shared by both JSON pipelines. Each gate returns either a
usable value or a Rejection; it never writes to the response itself. The
pipeline that drives the gates writes a Rejection exactly once and stops.

    gate                              value on success      rejection
    ───────────────────────────────── ──────────────────── ─────────────────
    post_or_rejection()               method               405
    content_type_json_or_rejection()  MediaType            400
    body_text_or_rejection()          body text            400 / 411
    json_or_rejection(text)           JSON value           400
    resource_or_rejection(text, ...)  typed input          400 + traceback
    accept_json_or_rejection()        Accept               400
    invoke(handler, value)            handler output       500 + traceback

Values may legitimately be None (JSON null, a handler returning nothing),
so callers test for ``isinstance(result, Rejection)``.

An exchange lives for one request and is never shared between threads.

=============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from ..codec import JsonValue, MarshallContext, UnmarshallContext, parse, to_text
from ..config import DEFAULT_CONFIG, HandlerConfig
from ..errors import NotAcceptableHeaderError
from ..http.media_types import ACCEPT_CHARSET_UTF_8, MEDIA_TYPE_JSON, Accept, MediaType
from ..http.request import ACCEPT, CONTENT_LENGTH, CONTENT_TYPE, HTTPRequest
from ..http.response import HTTPEntity, HTTPResponse
from ..http.status_codes import HTTPStatus, HttpStatus


logger = logging.getLogger(__name__)

# Added to successful typed responses: the simple name of the output's type
X_CONTENT_TYPE_NAME = "X-Content-Type-Name"


@dataclass(frozen=True)
class Rejection:
    """A terminal outcome: the status to write and an optional cause."""

    status: HttpStatus
    cause: Optional[BaseException] = None


def type_name(target_type: Any) -> str:
    """Fully qualified name, e.g. ``app.models.Conversion``."""
    qualname = getattr(target_type, "__qualname__", None)
    if qualname is None:
        return repr(target_type)
    return f"{target_type.__module__}.{qualname}"


def simple_type_name(target_type: Any) -> str:
    """Unqualified name, e.g. ``Conversion``."""
    return getattr(target_type, "__name__", repr(target_type))


class JsonExchange:
    """Validation and response shaping for one request/response pair."""

    def __init__(
        self,
        request: HTTPRequest,
        response: HTTPResponse,
        config: HandlerConfig = DEFAULT_CONFIG,
    ):
        self.request = request
        self.response = response
        self.config = config

    # =========================================================================
    # GATES
    # =========================================================================

    def post_or_rejection(self) -> Union[str, Rejection]:
        method = self.request.method
        if method != "POST":
            return Rejection(HTTPStatus.METHOD_NOT_ALLOWED.with_message(f"Expected POST got {method}"))
        return method

    def content_type_json_or_rejection(self) -> Union[MediaType, Rejection]:
        content_type = self.request.content_type
        if content_type is None:
            return self.bad_request(f"Missing {CONTENT_TYPE}")
        if not MEDIA_TYPE_JSON.equals_ignoring_parameters(content_type):
            return self.bad_request(
                f"Header {CONTENT_TYPE} expected {MEDIA_TYPE_JSON} got {self.request.get_header(CONTENT_TYPE)}"
            )
        return content_type

    def body_text_or_rejection(self) -> Union[str, Rejection]:
        """
        Read the body text and check it against Content-Length.

        Order matters: an unreadable body wins over an empty one, which
        wins over a missing Content-Length, which wins over a mismatch.
        """
        request = self.request
        try:
            body_text = request.body_text()
        except Exception as cause:
            return self.bad_request(f"Invalid content: {cause}", cause)

        if not body_text:
            return self.bad_request("Required body missing")

        content_length = request.content_length
        if content_length is None:
            return Rejection(HTTPStatus.LENGTH_REQUIRED.status())

        body_length = request.body_length
        if content_length != body_length:
            return self.bad_request(
                f"{CONTENT_LENGTH}: {content_length} != body length={body_length} mismatch"
            )

        return body_text

    def json_or_rejection(self, text: str) -> Union[JsonValue, Rejection]:
        """
        Parse as a generic JSON value; the parser message is the status message.

        Nesting deeper than the interpreter's recursion limit is a client
        error like any other malformed body.
        """
        try:
            return parse(text)
        except (ValueError, RecursionError) as cause:
            return self.bad_request(str(cause))

    def resource_or_rejection(
        self,
        text: str,
        input_type: Any,
        context: UnmarshallContext,
    ) -> Union[Any, Rejection]:
        """Parse and unmarshal into ``input_type``."""
        try:
            return context.unmarshall(parse(text), input_type)
        except Exception as cause:
            return self.bad_request(f"Invalid {type_name(input_type)}: {cause}", cause)

    def accept_json_or_rejection(self) -> Union[Accept, Rejection]:
        accept = self.request.accept
        if accept is None:
            return self.bad_request(f"Missing {ACCEPT}")
        if not accept.test(MEDIA_TYPE_JSON):
            return self.bad_request(
                f"Header {ACCEPT} expected {MEDIA_TYPE_JSON} got {self.request.get_header(ACCEPT)}"
            )
        return accept

    def invoke(self, handler: Callable[[Any], Any], value: Any) -> Union[Any, Rejection]:
        """
        Call the handler function exactly once.

        This is the only place handler failures are caught.
        """
        try:
            return handler(value)
        except Exception as cause:
            logger.exception(f"Handler {handler!r} failed for {self.request.method} {self.request.path}")
            return self.failure(cause)

    # =========================================================================
    # REJECTIONS
    # =========================================================================

    @staticmethod
    def bad_request(message: str, cause: Optional[BaseException] = None) -> Rejection:
        return Rejection(HTTPStatus.BAD_REQUEST.with_message(message), cause)

    @staticmethod
    def failure(cause: BaseException) -> Rejection:
        return Rejection(HTTPStatus.INTERNAL_SERVER_ERROR.with_message_or_default(str(cause)), cause)

    def reject(self, rejection: Rejection, always_add_entity: bool = False) -> None:
        """
        Write a rejection: the status, then a diagnostic entity if any.

        With a cause the entity is a traceback dump (or empty when stack
        traces are disabled). Without one, an empty entity is added only
        when ``always_add_entity`` is set.
        """
        logger.debug(f"Rejected {self.request.method} {self.request.path}: {rejection.status}")

        self.response.set_status(rejection.status)
        if rejection.cause is not None:
            self.response.add_entity(
                HTTPEntity.dump_stack_trace(rejection.cause)
                if self.config.dump_stack_traces
                else HTTPEntity.EMPTY
            )
        elif always_add_entity:
            self.response.add_entity(HTTPEntity.EMPTY)

    # =========================================================================
    # SUCCESS
    # =========================================================================

    def select_charset(self) -> str:
        """
        Pick the response charset from Accept-Charset, UTF-8 when absent.

        Raises:
            NotAcceptableHeaderError: No listed charset is supported.
        """
        accept_charset = self.request.accept_charset or ACCEPT_CHARSET_UTF_8
        charset = accept_charset.charset()
        if charset is None:
            raise NotAcceptableHeaderError(
                f"AcceptCharset {accept_charset} contain unsupported charset"
            )
        return charset

    def write_typed_output(
        self,
        output: Any,
        output_type: Any,
        context: MarshallContext,
    ) -> Optional[Rejection]:
        """
        Marshal the handler output and write status and entity.

        A None output is 204 with no entity; the status message then names
        the declared output type since there is no value to inspect.
        """
        method = self.request.method

        if output is None:
            status_code = HTTPStatus.NO_CONTENT
            self.response.set_status(
                status_code.with_message(f"{method} {simple_type_name(output_type)} {status_code.phrase}")
            )
            return None

        try:
            text = to_text(context.marshall(output))
        except Exception as cause:
            logger.exception(f"Marshalling {type(output).__name__} failed")
            return self.failure(cause)

        runtime_name = type(output).__name__
        charset = self.select_charset()
        entity = (HTTPEntity.EMPTY
            .set_content_type(MEDIA_TYPE_JSON.set_charset(charset))
            .set_header(X_CONTENT_TYPE_NAME, runtime_name)
            .set_body_text(text, charset)
            .set_content_length())

        status_code = HTTPStatus.OK
        self.response.set_status(status_code.with_message(f"{method} {runtime_name} {status_code.phrase}"))
        self.response.add_entity(entity)
        return None

    def write_json_output(
        self,
        output: JsonValue,
        post: Callable[[HTTPEntity], HTTPEntity],
    ) -> Optional[Rejection]:
        """
        Serialize a generic JSON output, run ``post`` over the entity and
        write status and entity. A None output is 204 with an empty entity.
        """
        if output is None:
            status = HTTPStatus.NO_CONTENT.status()
            entity = HTTPEntity.EMPTY
        else:
            try:
                text = to_text(output)
            except (TypeError, ValueError) as cause:
                logger.exception(f"Serializing {type(output).__name__} failed")
                return self.failure(cause)
            charset = self.select_charset()
            status = HTTPStatus.OK.status()
            entity = (HTTPEntity.EMPTY
                .set_content_type(MEDIA_TYPE_JSON.set_charset(charset))
                .set_body_text(text, charset)
                .set_content_length())

        entity = post(entity)

        self.response.set_status(status)
        self.response.add_entity(entity)
        return None
