"""ZMQ multipart framing for request/response messages.

Request/Response (DEALER<->ROUTER)
    (optional routing prefix...), version, id, type, target, payload_json, bulk
"""

from __future__ import annotations

from typing import Sequence, Tuple

from ..codec import decode_payload, encode_payload
from ..message import REP, Message, Payload, Request, version


def to_frames(msg: Message, *, include_prefix: bool = False) -> Tuple[bytes, ...]:
    """Encode a Message to ZMQ request/response multipart frames."""

    if msg.id is None:
        raise RuntimeError("messages must have an id to be put on the wire")

    prefix: Tuple[bytes, ...] = tuple(msg.prefix) if include_prefix else ()

    payload_bytes, bulk = encode_payload(msg.payload)
    target = (msg.target or "").encode()
    parts = (
        version,
        msg.id,
        msg.type.encode(),
        target,
        payload_bytes,
        bulk,
    )
    return prefix + parts


def from_frames(parts: Sequence[bytes]) -> Message:
    """Decode ROUTER/DEALER parts into a Message, or a Request if the
    type is a request type.

    If a ROUTER identity prefix is present, it is stored as msg.prefix.
    """

    if not parts:
        raise ValueError("empty message")

    # ROUTER sockets prepend identity frames. We expect either:
    #   [version, id, type, target, payload, bulk]
    # or
    #   [ident, version, id, type, target, payload, bulk]
    if len(parts) > 6:
        start = len(parts) - 6
    else:
        start = 0

    prefix = tuple(parts[:start])

    if len(parts) - start < 5:
        raise ValueError(f"truncated message: {len(parts)} frames")

    their_version = parts[start]
    msg_id = parts[start + 1]

    if their_version != version:
        # Version mismatch: represent as an error reply.
        err = {
            "type": "RuntimeError",
            "text": f"message is protocol {their_version!r}, recipient expects {version!r}",
        }
        msg = Message(REP, payload=Payload(error=err), id=msg_id)
        msg.prefix = prefix
        return msg

    msg_type = parts[start + 2].decode()
    target = parts[start + 3].decode() if parts[start + 3] else None
    bulk_bytes = parts[start + 5] if len(parts) > start + 5 else b""
    payload = decode_payload(parts[start + 4], bulk_bytes)

    if msg_type in Request.valid_types:
        msg = Request(msg_type, target, payload, msg_id)
    else:
        msg = Message(msg_type, target, payload, msg_id)

    msg.prefix = prefix
    return msg
