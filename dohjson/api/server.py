"""DNS-over-HTTPS (JSON) request handling."""
import logging
from typing import Callable, Iterator, Optional

from flask import Request, Response

from dohjson.models import Answer, Question


logger = logging.getLogger(__name__)


DNS_JSON_MIME_TYPE = "application/dns-json"
CONTENT_TYPE = "application/dns-json; charset=utf-8"

# Resolves a question; returning None answers SERVFAIL.
HandlerFunc = Callable[[Question], Optional[Answer]]


class DoHServer:
    """Validates DoH requests and answers them through a handler.

    Requests are checked in a fixed order and the first failing check
    decides the status code:

    1. method is not GET: 400
    2. no Accept header: 400
    3. Accept starts with application/dns-json: 415
    4. no handler configured: 500
    5. not HTTPS and plaintext not allowed: 403
    6. empty name parameter: 400

    Otherwise the 200 status and headers are committed before the handler
    runs, so the handler must deal with its own failures.
    """

    def __init__(self, handler: Optional[HandlerFunc] = None, allow_http: bool = False):
        """Initialize server.

        Args:
            handler: Invoked once for every valid request
            allow_http: Answer requests that did not come over HTTPS
        """
        self.handler = handler
        self.allow_http = allow_http

    def serve(self, request: Request) -> Response:
        """Handle a single DNS-over-HTTPS request.

        Args:
            request: Incoming Flask/werkzeug request

        Returns:
            Response with the Answer JSON, or a bare error status
        """
        accept = request.headers.get("Accept", "")

        if request.method != "GET":
            return self._reject(400, f"method {request.method}")
        elif not accept:
            return self._reject(400, "missing Accept header")
        elif accept.startswith(DNS_JSON_MIME_TYPE):
            # TODO: DoHClient sends exactly this Accept value and gets a 415;
            # require it here instead once deployed clients are updated.
            return self._reject(415, f"Accept {accept}")
        elif self.handler is None:
            return self._reject(500, "no handler configured")
        elif request.scheme != "https" and not self.allow_http:
            return self._reject(403, f"scheme {request.scheme}")

        question = Question.from_url_params(request.args)

        if not question.name:
            return self._reject(400, "missing name")

        return Response(self._answer(question), status=200, content_type=CONTENT_TYPE)

    def _answer(self, question: Question) -> Iterator[str]:
        answer = self.handler(question)

        if answer is None:
            logger.warning(f"No answer for {question.name} type {question.type}, returning SERVFAIL")
            answer = Answer.server_failure()

        yield answer.to_json()

    @staticmethod
    def _reject(status: int, reason: str) -> Response:
        logger.debug(f"Rejected request with {status}: {reason}")
        return Response(status=status)
