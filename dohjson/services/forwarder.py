"""Forwarding resolution handler backed by an upstream DoH server."""
import logging
from typing import Optional

from dohjson.models import Answer, Question
from dohjson.services.doh_client import DoHClient


logger = logging.getLogger(__name__)


class Forwarder:
    """Resolution handler that relays each question to an upstream server.

    Instances are callables suitable as the DoHServer handler. Upstream
    failures yield None, which the server turns into SERVFAIL.
    """

    def __init__(self, client: DoHClient):
        """Initialize forwarder.

        Args:
            client: Client configured for the upstream server
        """
        self.client = client

    def __call__(self, question: Question) -> Optional[Answer]:
        result = self.client.execute(question)
        if not result.is_success:
            logger.warning(
                f"Upstream {self.client.addr} failed for {question.name}: {result.error}"
            )
            return None

        answer = result.answer
        message = (
            f"Forwarded {question.name} type {question.type}: "
            f"{answer.status_name} in {result.rtt * 1000:.1f}ms"
        )
        if answer.is_success:
            logger.info(message)
        else:
            # Negative answers are still relayed as-is
            logger.warning(message)
        return answer
