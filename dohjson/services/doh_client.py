"""DNS-over-HTTPS (JSON) client."""
import time
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests

from dohjson.models import Answer, Question


logger = logging.getLogger(__name__)


# HTTP User-Agent header given to the remote server.
USER_AGENT = "doh/1.0.0 (+https://github.com/jamescun/doh)"

DNS_JSON_MIME_TYPE = "application/dns-json"

DEFAULT_SERVER = "https://dns.google.com/resolve"


class ClientError(Exception):
    """Raised when a question cannot be sent or its answer cannot be read.

    Attributes:
        message: Short description of the failure
        cause: Underlying exception, if any
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(self._format())

    def _format(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class TransportError(ClientError):
    """Raised when the HTTP transport fails to complete the request."""
    pass


class ServerTimeoutError(TransportError):
    """Raised when the transport deadline expires before the server replies."""

    def __init__(self, cause: BaseException):
        super().__init__("server timeout", cause)


class HTTPError(ClientError):
    """Raised when the server replies with a non-200 status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP Error {status_code}")


class DecodeError(ClientError):
    """Raised when the response body is not a valid DoH JSON answer."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause), cause)

    def _format(self) -> str:
        return self.message


@dataclass
class QueryResult:
    """Result of a single DNS-over-HTTPS query.

    Attributes:
        answer: Decoded answer, None on failure
        rtt: Round-trip time in seconds, measured on failure too
        error: Failure raised while querying, None on success
    """
    answer: Optional[Answer]
    rtt: float
    error: Optional[ClientError] = None

    @property
    def is_success(self) -> bool:
        """Check if the query returned an answer."""
        return self.error is None

    def raise_for_error(self) -> Answer:
        """Return the answer, raising the query error if there was one."""
        if self.error is not None:
            raise self.error
        return self.answer


class DoHClient:
    """DNS-over-HTTPS client using the JSON format.

    Each call to execute() makes exactly one HTTP request; there are no
    retries. Timeouts are enforced by the transport.
    """

    def __init__(
        self,
        addr: Optional[str] = DEFAULT_SERVER,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 30.0,
        allow_http: bool = False,
    ):
        """Initialize client.

        Args:
            addr: URL of the DoH server (e.g. https://dns.google.com/resolve)
            session: requests session all queries are sent through
            timeout: Transport timeout in seconds, None to wait forever
            allow_http: Allow questions to be sent without HTTPS
        """
        self.addr = addr
        self.session = session or requests.Session()
        self.timeout = timeout
        self.allow_http = allow_http

    def execute(self, question: Question) -> QueryResult:
        """Execute a query against the configured server.

        Args:
            question: Question to ask

        Returns:
            QueryResult with the answer or the error, and the round-trip time
        """
        start_time = time.monotonic()

        try:
            answer = self._query(question)
        except ClientError as e:
            rtt = time.monotonic() - start_time
            logger.warning(f"Query {question.name} failed after {rtt:.3f}s: {e}")
            return QueryResult(answer=None, rtt=rtt, error=e)

        rtt = time.monotonic() - start_time
        logger.debug(f"Query {question.name} answered {answer.status_name} in {rtt:.3f}s")
        return QueryResult(answer=answer, rtt=rtt)

    def build_url(self, question: Question) -> str:
        """Build the request URL for a question.

        Any query string already present on the server address is replaced.

        Raises:
            ClientError: If no server is configured or HTTPS is required
        """
        if not self.addr:
            raise ClientError("no server configured")

        try:
            parts = urlsplit(self.addr)
        except ValueError as e:
            raise ClientError("invalid server address", e) from e
        if parts.scheme != "https" and not self.allow_http:
            raise ClientError("https required")

        query = urlencode(question.to_url_params())
        return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))

    def _query(self, question: Question) -> Answer:
        url = self.build_url(question)

        try:
            response = self.session.get(
                url,
                headers={
                    "Accept": DNS_JSON_MIME_TYPE,
                    "User-Agent": USER_AGENT,
                },
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise ServerTimeoutError(e) from e
        except requests.exceptions.RequestException as e:
            raise TransportError("request failed", e) from e

        try:
            if response.status_code != 200:
                raise HTTPError(response.status_code)

            try:
                return Answer.from_dict(response.json())
            except ValueError as e:
                raise DecodeError(e) from e
        finally:
            response.close()


DEFAULT_CLIENT = DoHClient()


def execute(question: Question) -> QueryResult:
    """Execute a query against Google DNS using the default client."""
    return DEFAULT_CLIENT.execute(question)
