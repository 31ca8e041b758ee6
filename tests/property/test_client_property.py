"""Property tests for the DNS-over-HTTPS client.

Property 5: Single Attempt Query
For any question, the client SHALL issue exactly one GET request carrying the
question as URL parameters and the DoH JSON headers, and never retry.

Property 6: Failure Classification
Timeouts, non-200 statuses and malformed bodies SHALL each surface as their
own error kind, with the round-trip time still reported.
"""
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
from hypothesis import given, strategies as st, settings

from dohjson.models import Answer, Question
from dohjson.services.doh_client import (
    USER_AGENT,
    ClientError,
    DecodeError,
    DoHClient,
    HTTPError,
    QueryResult,
    ServerTimeoutError,
    TransportError,
)


SERVER = "https://dns.example/resolve"

EXAMPLE_BODY = {
    "Status": 0,
    "TC": False,
    "RD": True,
    "RA": True,
    "AD": False,
    "CD": False,
    "Question": [{"name": "example.org.", "type": 1}],
    "Answer": [{"name": "example.org.", "type": 1, "TTL": 300, "data": "127.0.0.1"}],
}


def make_session(status_code=200, body=None, json_error=None, error=None):
    """Create a mock requests session returning a single canned response."""
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body

    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


class TestSingleAttemptQuery:
    """Property 5: Single Attempt Query"""

    @given(
        name=st.text(min_size=1, max_size=40, alphabet='abcdefghijklmnopqrstuvwxyz0123456789-.'),
        rr_type=st.integers(min_value=1, max_value=65535),
        disable_dnssec=st.booleans(),
    )
    @settings(max_examples=100)
    def test_question_is_sent_as_query_parameters(self, name, rr_type, disable_dnssec):
        """The request URL SHALL carry the question parameters.

        Feature: dohjson, Property 5: Single Attempt Query
        """
        session = make_session(body=EXAMPLE_BODY)
        client = DoHClient(addr=SERVER, session=session)
        question = Question(name=name, type=rr_type, disable_dnssec=disable_dnssec)

        client.execute(question)

        assert session.get.call_count == 1
        url = session.get.call_args.args[0]
        parts = urlsplit(url)
        assert (parts.scheme, parts.netloc, parts.path) == ("https", "dns.example", "/resolve")
        assert dict(parse_qsl(parts.query)) == question.to_url_params()

    def test_headers_and_timeout(self):
        session = make_session(body=EXAMPLE_BODY)
        client = DoHClient(addr=SERVER, session=session, timeout=5)

        client.execute(Question(name="example.org."))

        kwargs = session.get.call_args.kwargs
        assert kwargs["headers"] == {"Accept": "application/dns-json", "User-Agent": USER_AGENT}
        assert kwargs["timeout"] == 5
        assert USER_AGENT.startswith("doh/1.0.0 (+")

    def test_existing_query_string_is_replaced(self):
        session = make_session(body=EXAMPLE_BODY)
        client = DoHClient(addr="https://dns.example/resolve?stale=1#frag", session=session)

        client.execute(Question(name="example.org.", type=28))

        assert session.get.call_args.args[0] == "https://dns.example/resolve?name=example.org.&type=28"

    def test_decodes_answer(self):
        client = DoHClient(addr=SERVER, session=make_session(body=EXAMPLE_BODY))

        result = client.execute(Question(name="example.org."))

        assert result.is_success
        assert result.error is None
        assert result.answer == Answer.from_dict(EXAMPLE_BODY)
        assert result.answer.answer[0].data == "127.0.0.1"
        assert result.rtt >= 0

    @given(status_code=st.sampled_from([400, 403, 404, 415, 429, 500, 502, 503]))
    @settings(max_examples=20)
    def test_failures_are_not_retried(self, status_code):
        """A failed query SHALL NOT be retried.

        Feature: dohjson, Property 5: Single Attempt Query
        """
        session = make_session(status_code=status_code)
        client = DoHClient(addr=SERVER, session=session)

        client.execute(Question(name="example.org."))

        assert session.get.call_count == 1

    def test_response_is_closed(self):
        session = make_session(body=EXAMPLE_BODY)
        DoHClient(addr=SERVER, session=session).execute(Question(name="example.org."))
        session.get.return_value.close.assert_called_once()


class TestPreconditions:
    """Configuration checks before any request is made."""

    @pytest.mark.parametrize("addr", [None, ""])
    def test_no_server_configured(self, addr):
        session = make_session()
        result = DoHClient(addr=addr, session=session).execute(Question(name="example.org."))

        assert isinstance(result.error, ClientError)
        assert str(result.error) == "no server configured"
        assert result.answer is None
        session.get.assert_not_called()

    def test_malformed_server_address(self):
        session = make_session()
        result = DoHClient(addr="https://[::1", session=session).execute(Question(name="example.org."))

        assert type(result.error) is ClientError
        assert str(result.error).startswith("invalid server address")
        assert isinstance(result.error.cause, ValueError)
        session.get.assert_not_called()

    def test_https_required(self):
        session = make_session()
        result = DoHClient(addr="http://dns.example/resolve", session=session).execute(
            Question(name="example.org.")
        )

        assert str(result.error) == "https required"
        session.get.assert_not_called()

    def test_plaintext_allowed(self):
        session = make_session(body=EXAMPLE_BODY)
        client = DoHClient(addr="http://dns.example/resolve", session=session, allow_http=True)

        result = client.execute(Question(name="example.org."))

        assert result.is_success
        assert session.get.call_args.args[0].startswith("http://dns.example/resolve?")


class TestFailureClassification:
    """Property 6: Failure Classification"""

    @pytest.mark.parametrize("cause", [
        requests.exceptions.ReadTimeout("read timed out"),
        requests.exceptions.ConnectTimeout("connect timed out"),
    ])
    def test_timeout(self, cause):
        """Transport timeouts SHALL surface as a server timeout with the cause.

        Feature: dohjson, Property 6: Failure Classification
        """
        client = DoHClient(addr=SERVER, session=make_session(error=cause))

        result = client.execute(Question(name="example.org."))

        assert isinstance(result.error, ServerTimeoutError)
        assert isinstance(result.error, TransportError)
        assert "server timeout" in str(result.error)
        assert result.error.cause is cause
        assert result.error.__cause__ is cause

    def test_other_transport_failures(self):
        cause = requests.exceptions.ConnectionError("connection refused")
        client = DoHClient(addr=SERVER, session=make_session(error=cause))

        result = client.execute(Question(name="example.org."))

        assert type(result.error) is TransportError
        assert result.error.cause is cause
        assert "connection refused" in str(result.error)

    @given(status_code=st.integers(min_value=100, max_value=599).filter(lambda c: c != 200))
    @settings(max_examples=50)
    def test_non_200_status(self, status_code):
        """Non-200 replies SHALL carry the status code and skip the body.

        Feature: dohjson, Property 6: Failure Classification
        """
        session = make_session(status_code=status_code)
        client = DoHClient(addr=SERVER, session=session)

        result = client.execute(Question(name="example.org."))

        assert isinstance(result.error, HTTPError)
        assert result.error.status_code == status_code
        assert str(result.error) == f"HTTP Error {status_code}"
        session.get.return_value.json.assert_not_called()

    def test_malformed_json(self):
        cause = ValueError("Expecting value: line 1 column 1 (char 0)")
        client = DoHClient(addr=SERVER, session=make_session(json_error=cause))

        result = client.execute(Question(name="example.org."))

        assert isinstance(result.error, DecodeError)
        assert str(result.error) == "Expecting value: line 1 column 1 (char 0)"
        assert result.error.cause is cause

    def test_unknown_record_type_in_body(self):
        body = {"Status": 0, "Answer": [{"name": "a.", "type": "BOGUS", "TTL": 1, "data": ""}]}
        client = DoHClient(addr=SERVER, session=make_session(body=body))

        result = client.execute(Question(name="a."))

        assert isinstance(result.error, DecodeError)
        assert "unknown record type" in str(result.error)

    def test_rtt_measured_on_error_path(self):
        clock = MagicMock()
        clock.monotonic.side_effect = [100.0, 100.25]
        cause = requests.exceptions.ReadTimeout("read timed out")
        client = DoHClient(addr=SERVER, session=make_session(error=cause))

        with patch("dohjson.services.doh_client.time", clock):
            result = client.execute(Question(name="example.org."))

        assert result.rtt == pytest.approx(0.25)
        assert result.answer is None

    def test_raise_for_error(self):
        error = HTTPError(502)
        with pytest.raises(HTTPError):
            QueryResult(answer=None, rtt=0.1, error=error).raise_for_error()

        answer = Answer()
        assert QueryResult(answer=answer, rtt=0.1).raise_for_error() is answer
