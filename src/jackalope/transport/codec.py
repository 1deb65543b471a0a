"""Transport codec for message payloads."""

from __future__ import annotations

from typing import Optional, Tuple

import msgspec

from .message import Payload


_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder()


def encode_payload(payload: Optional[Payload]) -> Tuple[bytes, bytes]:
    """Return (json_bytes, bulk_bytes)."""

    if payload is None:
        return b"", b""

    bulk = payload.bulk or b""
    j = _encoder.encode(payload.to_dict())
    return j, bulk


def decode_payload(payload_bytes: bytes, bulk_bytes: bytes) -> Optional[Payload]:
    if payload_bytes in (b"", None):
        return None

    try:
        d = _decoder.decode(payload_bytes)
    except msgspec.DecodeError as exc:
        raise ValueError(f"malformed payload: {exc}") from exc

    bulk = bulk_bytes if bulk_bytes not in (b"", None) else None

    if not isinstance(d, dict):
        # Preserve non-conforming payloads as the bare value.
        return Payload(value=d, bulk=bulk)

    return Payload.from_dict(d, bulk=bulk)
