"""Question data model."""
import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from dohjson.models.fields import expect_object, get_field, parse_bool
from dohjson.models.rrtypes import A, decode_record_type


# Optional sign and ASCII digits only; int() alone also takes " 28", "1_6"
_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Question:
    """A single DNS question.

    Only the name is required. The name SHOULD be fully qualified but this
    is not enforced.

    Attributes:
        name: Hostname to resolve (e.g. "example.org.")
        type: Numeric record type to request
        disable_dnssec: Ask the server to skip DNSSEC validation (CD bit)
        edns_client_subnet: Optional client subnet for geo-aware resolution
    """
    name: str
    type: int = A
    disable_dnssec: bool = False
    edns_client_subnet: Optional[str] = None

    def __post_init__(self):
        # "" and None both mean no subnet; keep a single representation
        if not self.edns_client_subnet:
            object.__setattr__(self, "edns_client_subnet", None)

    def to_dict(self) -> dict:
        """Convert to the DoH JSON representation."""
        data = {
            "name": self.name,
            "type": self.type,
            "CD": self.disable_dnssec,
        }
        if self.edns_client_subnet:
            data["edns_client_subnet"] = self.edns_client_subnet
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        """Create Question from its DoH JSON representation.

        Raises:
            ValueError: If a field has the wrong JSON type or the record
                type mnemonic is unknown
        """
        data = expect_object(data, "Question")
        return cls(
            name=get_field(data, "name", str, ""),
            type=decode_record_type(data.get("type")),
            disable_dnssec=get_field(data, "CD", bool, False),
            edns_client_subnet=get_field(data, "edns_client_subnet", str) or None,
        )

    @classmethod
    def from_url_params(cls, params: Mapping[str, str]) -> "Question":
        """Create Question from URL query parameters.

        A missing, unparsable or non-positive ``type`` is coerced to A.
        An unparsable ``cd`` is treated as false. The name is taken as-is.

        Args:
            params: Query parameters (dict, werkzeug MultiDict, ...)

        Returns:
            Question built from the parameters
        """
        raw_type = params.get("type") or ""
        rr_type = int(raw_type) if _DECIMAL.fullmatch(raw_type) else A
        if rr_type < 1:
            rr_type = A

        return cls(
            name=params.get("name") or "",
            type=rr_type,
            disable_dnssec=parse_bool(params.get("cd")),
            edns_client_subnet=params.get("edns_client_subnet") or None,
        )

    def to_url_params(self) -> Dict[str, str]:
        """Convert to URL query parameters.

        ``name`` and ``type`` are always present, ``cd`` only when DNSSEC
        validation is disabled and ``edns_client_subnet`` only when set.
        """
        params = {
            "name": self.name,
            "type": str(self.type) if self.type > 0 else str(A),
        }
        if self.disable_dnssec:
            params["cd"] = "1"
        if self.edns_client_subnet:
            params["edns_client_subnet"] = self.edns_client_subnet
        return params


def is_fqdn(name: str) -> bool:
    """Check if a name is fully qualified (ends with a dot)."""
    return len(name) > 1 and name.endswith(".")


def fqdn(name: str) -> str:
    """Return the name fully qualified, appending a dot if needed."""
    if not is_fqdn(name):
        return name + "."
    return name
