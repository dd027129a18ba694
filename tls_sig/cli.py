"""Command-line front end for issuing and inspecting tokens."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import IssuerConfig, setup_logging
from .errors import TLSSigError
from .privilege import Privilege, describe
from .token import NamedRoom, NumericRoom, TLSSigIssuer, decode_token

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tls-sig", description="Issue UserSig and PrivateMapKey tokens")
    parser.add_argument("--sdk-app-id", type=int, default=None, help="Application id (default: $TLS_SIG_SDKAPPID)")
    parser.add_argument("--secret-key", default=None, help="Shared secret (default: $TLS_SIG_SECRET_KEY)")
    sub = parser.add_subparsers(dest="command", required=True)

    usersig = sub.add_parser("usersig", help="Issue a UserSig")
    usersig.add_argument("identifier")
    usersig.add_argument("--expire", type=int, default=None, help="Validity in seconds")

    privmapkey = sub.add_parser("privmapkey", help="Issue a PrivateMapKey")
    privmapkey.add_argument("identifier")
    privmapkey.add_argument("--expire", type=int, required=True, help="Validity in seconds")
    room = privmapkey.add_mutually_exclusive_group(required=True)
    room.add_argument("--room-id", type=int)
    room.add_argument("--room-name")
    privmapkey.add_argument("--privilege-map", type=int, default=int(Privilege.ALL))

    decode = sub.add_parser("decode", help="Print the payload carried by a token")
    decode.add_argument("token")
    return parser


def _load_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> IssuerConfig:
    if (args.sdk_app_id is None) != (args.secret_key is None):
        parser.error("--sdk-app-id and --secret-key must be given together")
    if args.sdk_app_id is not None:
        return IssuerConfig(sdk_app_id=args.sdk_app_id, secret_key=args.secret_key)
    return IssuerConfig.from_env()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    try:
        if args.command == "decode":
            print(decode_token(args.token))
            return 0

        issuer = TLSSigIssuer.from_config(_load_config(parser, args))
        if args.command == "usersig":
            print(issuer.issue_user_sig(args.identifier, args.expire))
        else:
            room = NumericRoom(args.room_id) if args.room_id is not None else NamedRoom(args.room_name)
            logger.info("Granting %s", ", ".join(describe(args.privilege_map)) or "no privileges")
            issued = issuer.issue(args.identifier, args.expire, room=room, privilege_map=args.privilege_map)
            print(issued.token)
    except TLSSigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
