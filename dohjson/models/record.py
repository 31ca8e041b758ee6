"""Resource Record data model."""
from dataclasses import dataclass

from dohjson.models.fields import expect_object, get_field
from dohjson.models.rrtypes import decode_record_type, type_to_name


@dataclass(frozen=True)
class Record:
    """A single DNS resource record returned as part of an Answer.

    Attributes:
        name: Owner name of the record
        type: Numeric record type
        ttl: Time to live in seconds
        data: Record data in presentation form (e.g. "127.0.0.1")
    """
    name: str
    type: int
    ttl: int
    data: str

    def to_dict(self) -> dict:
        """Convert to the DoH JSON representation."""
        return {
            "name": self.name,
            "type": self.type,
            "TTL": self.ttl,
            "data": self.data,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Record":
        """Create Record from its DoH JSON representation."""
        data = expect_object(data, "Record")
        return cls(
            name=get_field(data, "name", str, ""),
            type=decode_record_type(data.get("type")),
            ttl=get_field(data, "TTL", int, 0),
            data=get_field(data, "data", str, ""),
        )

    @property
    def type_name(self) -> str:
        """Mnemonic of the record type."""
        return type_to_name(self.type)
