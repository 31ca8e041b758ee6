"""DNS record type and return code symbol tables.

Record types and return codes as registered by IANA:
https://www.iana.org/assignments/dns-parameters/dns-parameters.xhtml
"""
from types import MappingProxyType
from typing import Any, Dict, Mapping


# Return codes (RCODE)
SUCCESS = 0          # NoError
FORMAT_ERROR = 1     # FormErr
SERVER_FAILURE = 2   # ServFail
NAME_ERROR = 3       # NXDomain
NOT_IMPLEMENTED = 4  # NotImp
REFUSED = 5
YX_DOMAIN = 6        # Name exists when it should not
YX_RRSET = 7         # RR set exists when it should not
NX_RRSET = 8         # RR set that should exist does not
NOT_AUTH = 9         # Server not authoritative for zone
NOT_ZONE = 10        # Name not contained in zone
BAD_SIG = 16         # TSIG signature failure
BAD_VERS = 16        # Bad OPT version
BAD_KEY = 17
BAD_TIME = 18
BAD_MODE = 19
BAD_NAME = 20
BAD_ALG = 21
BAD_TRUNC = 22
BAD_COOKIE = 23

# Record types
A = 1
NS = 2
CNAME = 5
SOA = 6
PTR = 12
HINFO = 13
MX = 15
TXT = 16
RP = 17
AFSDB = 18
SIG = 24
KEY = 25
AAAA = 28
LOC = 29
SRV = 33
NAPTR = 35
KX = 36
CERT = 37
DNAME = 39
OPT = 41
APL = 42
DS = 43
SSHFP = 44
IPSECKEY = 45
RRSIG = 46
NSEC = 47
DNSKEY = 48
DHCID = 49
NSEC3 = 50
NSEC3PARAM = 51
TLSA = 52
HIP = 55
CDS = 59
CDNSKEY = 60
OPENPGPKEY = 61
SPF = 99
TKEY = 249
TSIG = 250
IXFR = 251
AXFR = 252
ANY = 255
URI = 256
CAA = 257
TA = 32768
DLV = 32769

# Returned by type_from_name() for mnemonics that are not registered.
UNKNOWN_RECORD_TYPE = -1


def _freeze(pairs) -> Mapping:
    return MappingProxyType(dict(pairs))


def _reverse(table: Mapping) -> Mapping:
    # First registered mnemonic wins when two share a number.
    reverse: Dict[int, str] = {}
    for name, code in table.items():
        reverse.setdefault(code, name)
    return MappingProxyType(reverse)


RECORD_TYPES: Mapping[str, int] = _freeze([
    ("A", A),
    ("NS", NS),
    ("CNAME", CNAME),
    ("SOA", SOA),
    ("PTR", PTR),
    ("HINFO", HINFO),
    ("MX", MX),
    ("TXT", TXT),
    ("RP", RP),
    ("AFSDB", AFSDB),
    ("SIG", SIG),
    ("KEY", KEY),
    ("AAAA", AAAA),
    ("LOC", LOC),
    ("SRV", SRV),
    ("NAPTR", NAPTR),
    ("KX", KX),
    ("CERT", CERT),
    ("DNAME", DNAME),
    ("OPT", OPT),
    ("APL", APL),
    ("DS", DS),
    ("SSHFP", SSHFP),
    ("IPSECKEY", IPSECKEY),
    ("RRSIG", RRSIG),
    ("NSEC", NSEC),
    ("DNSKEY", DNSKEY),
    ("DHCID", DHCID),
    ("NSEC3", NSEC3),
    ("NSEC3PARAM", NSEC3PARAM),
    ("TLSA", TLSA),
    ("HIP", HIP),
    ("CDS", CDS),
    ("CDNSKEY", CDNSKEY),
    ("OPENPGPKEY", OPENPGPKEY),
    ("SPF", SPF),
    ("TKEY", TKEY),
    ("TSIG", TSIG),
    ("IXFR", IXFR),
    ("AXFR", AXFR),
    ("ANY", ANY),
    ("URI", URI),
    ("CAA", CAA),
    ("TA", TA),
    ("DLV", DLV),
])

RECORD_TYPE_NAMES: Mapping[int, str] = _reverse(RECORD_TYPES)

RETURN_CODES: Mapping[str, int] = _freeze([
    ("NOERROR", SUCCESS),
    ("FORMERR", FORMAT_ERROR),
    ("SERVFAIL", SERVER_FAILURE),
    ("NXDOMAIN", NAME_ERROR),
    ("NOTIMP", NOT_IMPLEMENTED),
    ("REFUSED", REFUSED),
    ("YXDOMAIN", YX_DOMAIN),
    ("YXRRSET", YX_RRSET),
    ("NXRRSET", NX_RRSET),
    ("NOTAUTH", NOT_AUTH),
    ("NOTZONE", NOT_ZONE),
    ("BADSIG", BAD_SIG),
    ("BADVERS", BAD_VERS),
    ("BADKEY", BAD_KEY),
    ("BADTIME", BAD_TIME),
    ("BADMODE", BAD_MODE),
    ("BADNAME", BAD_NAME),
    ("BADALG", BAD_ALG),
    ("BADTRUNC", BAD_TRUNC),
    ("BADCOOKIE", BAD_COOKIE),
])

RETURN_CODE_NAMES: Mapping[int, str] = _reverse(RETURN_CODES)


def type_from_name(name: str) -> int:
    """Return the numeric record type for a mnemonic.

    Matching is exact and case-sensitive ("aaaa" is not "AAAA").

    Args:
        name: Record type mnemonic (e.g. "A", "AAAA", "TXT")

    Returns:
        Numeric record type, or UNKNOWN_RECORD_TYPE if not registered
    """
    return RECORD_TYPES.get(name, UNKNOWN_RECORD_TYPE)


def type_to_name(code: int) -> str:
    """Return the mnemonic for a numeric record type, or "unknown(N)"."""
    name = RECORD_TYPE_NAMES.get(code)
    if name is None:
        return f"unknown({code})"
    return name


def return_code_to_name(code: int) -> str:
    """Return the mnemonic for a return code, or "UNKNOWN"."""
    return RETURN_CODE_NAMES.get(code, "UNKNOWN")


def decode_record_type(value: Any) -> int:
    """Decode a record type from its JSON form.

    Servers send the type either as a number or as a quoted mnemonic, so
    the decoded token is inspected to pick the branch:

    - str: looked up by mnemonic; an empty string yields 0
    - int: used as-is
    - null: yields 0

    Args:
        value: Decoded JSON value of a "type" field

    Returns:
        Numeric record type

    Raises:
        ValueError: On an unregistered mnemonic or a non-numeric token
    """
    if isinstance(value, str):
        if not value:
            return 0
        if value not in RECORD_TYPES:
            raise ValueError("unknown record type")
        return RECORD_TYPES[value]

    if value is None:
        return 0

    # bool is an int subclass but never a valid type token
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    raise ValueError(f"cannot decode record type from {value!r}")
