"""Answer data model."""
import json
from dataclasses import dataclass, field
from typing import List, Optional

from dohjson.models.fields import expect_object, get_field
from dohjson.models.question import Question
from dohjson.models.record import Record
from dohjson.models.rrtypes import SERVER_FAILURE, SUCCESS, return_code_to_name

# Escaped in encoded answers so the JSON can be embedded in HTML
_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _decode_list(data: dict, key: str, item_cls) -> list:
    items = get_field(data, key, list, [])
    return [item_cls.from_dict(item) for item in items]


@dataclass(frozen=True)
class Answer:
    """Full response to a DNS-over-HTTPS question.

    The boolean flags mirror the DNS header bits of the upstream reply.

    Attributes:
        status: DNS response code (RCODE)
        truncated: TC bit, the reply did not fit a single packet
        recursion_desired: RD bit
        recursion_available: RA bit
        dnssec_validated: AD bit, all data was validated with DNSSEC
        dnssec_disabled: CD bit, the client asked to skip validation
        question: Echo of the question(s) asked
        answer: Answer section records
        authority: Authority section records
        additional: Additional section records
        comment: Optional diagnostic text from the server
        edns_client_subnet: Optional echoed client subnet
    """
    status: int = SUCCESS
    truncated: bool = False
    recursion_desired: bool = False
    recursion_available: bool = False
    dnssec_validated: bool = False
    dnssec_disabled: bool = False
    question: List[Question] = field(default_factory=list)
    answer: List[Record] = field(default_factory=list)
    authority: List[Record] = field(default_factory=list)
    additional: List[Record] = field(default_factory=list)
    comment: Optional[str] = None
    edns_client_subnet: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the DoH JSON representation.

        Authority, Additional, Comment and edns_client_subnet are left out
        when empty.
        """
        data = {
            "Status": self.status,
            "TC": self.truncated,
            "RD": self.recursion_desired,
            "RA": self.recursion_available,
            "AD": self.dnssec_validated,
            "CD": self.dnssec_disabled,
            "Question": [q.to_dict() for q in self.question],
            "Answer": [r.to_dict() for r in self.answer],
        }
        if self.authority:
            data["Authority"] = [r.to_dict() for r in self.authority]
        if self.additional:
            data["Additional"] = [r.to_dict() for r in self.additional]
        if self.comment:
            data["Comment"] = self.comment
        if self.edns_client_subnet:
            data["edns_client_subnet"] = self.edns_client_subnet
        return data

    def to_json(self) -> str:
        """Serialize to the compact JSON wire form, newline terminated."""
        text = json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        # Only string contents can hold these characters
        for char, escaped in _HTML_ESCAPES:
            text = text.replace(char, escaped)
        return text + "\n"

    @classmethod
    def from_dict(cls, data: dict) -> "Answer":
        """Create Answer from its DoH JSON representation.

        Raises:
            ValueError: If the document does not match the DoH JSON schema
        """
        data = expect_object(data, "Answer")
        return cls(
            status=get_field(data, "Status", int, SUCCESS),
            truncated=get_field(data, "TC", bool, False),
            recursion_desired=get_field(data, "RD", bool, False),
            recursion_available=get_field(data, "RA", bool, False),
            dnssec_validated=get_field(data, "AD", bool, False),
            dnssec_disabled=get_field(data, "CD", bool, False),
            question=_decode_list(data, "Question", Question),
            answer=_decode_list(data, "Answer", Record),
            authority=_decode_list(data, "Authority", Record),
            additional=_decode_list(data, "Additional", Record),
            comment=get_field(data, "Comment", str) or None,
            edns_client_subnet=get_field(data, "edns_client_subnet", str) or None,
        )

    @classmethod
    def server_failure(cls) -> "Answer":
        """Answer returned when no resolution was available."""
        return cls(status=SERVER_FAILURE)

    @property
    def status_name(self) -> str:
        """Mnemonic of the response code (e.g. "NOERROR")."""
        return return_code_to_name(self.status)

    @property
    def is_success(self) -> bool:
        """Check if the response code is NOERROR."""
        return self.status == SUCCESS
