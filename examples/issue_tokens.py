"""Example: issue a UserSig and a room-scoped PrivateMapKey, then self-check them."""

from __future__ import annotations

import os

from tls_sig import IssuerConfig, Privilege, TLSSigIssuer, TokenVerifier


def main() -> None:
    config = IssuerConfig(
        sdk_app_id=int(os.getenv("TLS_SIG_SDKAPPID", "1400000000")),
        secret_key=os.getenv("TLS_SIG_SECRET_KEY", "example-secret"),
    )
    issuer = TLSSigIssuer.from_config(config)
    verifier = TokenVerifier(config)

    user_sig = issuer.issue_user_sig("alice", 86400)
    print("USERSIG:", user_sig)
    print("VERIFY:", verifier.verify(user_sig, identifier="alice").reason)

    viewer = Privilege.JOIN_ROOM | Privilege.RECV_AUDIO | Privilege.RECV_VIDEO
    map_key = issuer.issue_private_map_key_by_room_name("alice", 3600, "standup", viewer)
    print("PRIVATEMAPKEY:", map_key)
    print("VERIFY:", verifier.verify(map_key, identifier="alice").reason)


if __name__ == "__main__":
    main()
