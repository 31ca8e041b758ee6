"""Command-line DNS-over-HTTPS query tool."""
import argparse
import logging
import sys
from typing import List, Optional
from urllib.parse import urlsplit

from dohjson.config import Config, ConfigurationError
from dohjson.models import Answer, Question, Record
from dohjson.models.rrtypes import UNKNOWN_RECORD_TYPE, type_from_name
from dohjson.services.doh_client import DoHClient


logger = logging.getLogger(__name__)


def _build_parser(defaults: Config) -> argparse.ArgumentParser:
    """Create the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="doh",
        description="Query a DNS-over-HTTPS server using the JSON format.",
    )
    parser.add_argument(
        "--server",
        default=defaults.upstream,
        help="URL of the DNS-over-HTTPS server (default: %(default)s).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.timeout,
        help="Query timeout in seconds (default: %(default)s).",
    )
    parser.add_argument(
        "--allow-http",
        action="store_true",
        default=defaults.allow_http,
        help="Allow questions over plain HTTP.",
    )
    parser.add_argument("--json", action="store_true", help="Output the answer as JSON.")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: %(default)s).")
    parser.add_argument("type", help="Record type mnemonic, e.g. A, AAAA, MX.")
    parser.add_argument("name", help="Name to resolve.")
    return parser


def _format_records(records: List[Record]) -> List[str]:
    return [f"  {r.name}   {r.type_name}  {r.ttl}  '{r.data}'" for r in records]


def format_answer(answer: Answer, rtt: float) -> str:
    """Render an answer as human-readable text."""
    lines = [
        f"Return Code: {answer.status_name}",
        f"Truncated: {str(answer.truncated).lower()}",
        "Recursion Desired / Available: "
        f"{str(answer.recursion_desired).lower()} / {str(answer.recursion_available).lower()}",
        "DNSSEC Disabled / Validated: "
        f"{str(answer.dnssec_disabled).lower()} / {str(answer.dnssec_validated).lower()}",
        "",
        "Answer:",
    ]
    lines.extend(_format_records(answer.answer))

    if answer.authority:
        lines.extend(["", "Authority:"])
        lines.extend(_format_records(answer.authority))

    if answer.additional:
        lines.extend(["", "Additional:"])
        lines.extend(_format_records(answer.additional))

    if answer.comment:
        lines.extend(["", f"Comment: {answer.comment}"])

    lines.extend(["", f"Query time: {rtt * 1000:.3f}ms"])
    return "\n".join(lines)


def _build_question(args: argparse.Namespace) -> Question:
    rr_type = type_from_name(args.type)
    if rr_type == UNKNOWN_RECORD_TYPE:
        raise ConfigurationError(f"unknown record type: {args.type}")
    return Question(name=args.name, type=rr_type)


def _build_client(args: argparse.Namespace) -> DoHClient:
    try:
        parts = urlsplit(args.server)
    except ValueError:
        raise ConfigurationError(f"invalid server: {args.server}") from None
    if not parts.scheme or not parts.netloc:
        raise ConfigurationError(f"invalid server: {args.server}")
    if args.timeout <= 0:
        raise ConfigurationError(f"invalid timeout: {args.timeout}")
    return DoHClient(addr=args.server, timeout=args.timeout, allow_http=args.allow_http)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Returns:
        Exit code: 0 on success, 1 if the query failed, 2 on configuration errors
    """
    try:
        defaults = Config.from_env()
    except ConfigurationError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2

    args = _build_parser(defaults).parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        question = _build_question(args)
        client = _build_client(args)
    except ConfigurationError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2

    logger.debug(f"Querying {client.addr} for {question.name} {args.type}")
    result = client.execute(question)
    if not result.is_success:
        print(f"runtime error: could not query server: {result.error}", file=sys.stderr)
        return 1

    if args.json:
        sys.stdout.write(result.answer.to_json())
    else:
        print(format_answer(result.answer, result.rtt))
    return 0


if __name__ == "__main__":
    sys.exit(main())
