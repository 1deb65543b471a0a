"""ZeroMQ request/response transport.

A DEALER socket on the client side, a ROUTER socket on the server side.

Public surface area:
    - Client / Server classes
    - client(address, port) cache helper
"""

from __future__ import annotations

import atexit
import logging
import sys
import threading
import time
import traceback
from typing import Dict, Optional, Tuple

import zmq

from ..base import TransportConnectionError, TransportPortError, TransportTimeout
from ..message import ACK, REP, Message, Payload, Request
from .framing import from_frames, to_frames


logger = logging.getLogger(__name__)

minimum_port = 10079
maximum_port = 13679
zmq_context = zmq.Context()


class Client:
    """Issue requests via a ZeroMQ DEALER socket and wait for responses.

    Requests are handled one at a time; concurrent callers queue up on
    an internal lock. Responses whose id does not match the outstanding
    request (late replies to a request that already timed out) are
    discarded.
    """

    timeout = 30

    def __init__(self, address: str, port: int):
        self.port = int(port)
        self.address = address

        server = f"tcp://{address}:{self.port}"
        identity = f"request.Client.{id(self)}".encode()

        self.socket = zmq_context.socket(zmq.DEALER)
        self.socket.setsockopt(zmq.LINGER, 0)
        self.socket.identity = identity

        try:
            self.socket.connect(server)
        except zmq.ZMQError as exc:
            self.socket.close()
            raise TransportConnectionError(f"cannot connect to {server}: {exc}") from exc

        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Client({self.address!r}, {self.port})"

    def send(self, request: Request, timeout: Optional[float] = None) -> Message:
        """Send *request* and block until the matching REP arrives."""

        if timeout is None:
            timeout = self.timeout

        frames = to_frames(request)

        with self._lock:
            if self.socket.closed:
                raise TransportConnectionError(f"{self!r} is closed")

            self.socket.send_multipart(frames)
            deadline = time.monotonic() + timeout

            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0 or not self.socket.poll(int(remaining * 1000), zmq.POLLIN):
                    raise TransportTimeout(
                        f"{request.type} @ {self.address}:{self.port}: no response in {timeout:.2f} sec"
                    )

                response = from_frames(self.socket.recv_multipart())

                if response.id != request.id:
                    continue
                if response.type == ACK:
                    continue

                return response

    def close(self) -> None:
        with self._lock:
            self.socket.close()


class Server:
    """Receive requests via a ZeroMQ ROUTER socket, respond to them.

    Subclasses override :func:`req_handler`. Requests are handled in
    arrival order on a single background thread.
    """

    port = None  # auto
    poll_interval = 100

    def __init__(self, address: Optional[str] = None, port: Optional[int] = None, avoid: Optional[set] = None):
        self.address = address or "127.0.0.1"
        self.port = int(port) if port is not None else None
        self.avoid = set(avoid or set())

        self.socket = zmq_context.socket(zmq.ROUTER)
        self.socket.setsockopt(zmq.LINGER, 0)

        if self.port is None:
            self.port = self._bind_any()
        else:
            try:
                self.socket.bind(f"tcp://{self.address}:{self.port}")
            except zmq.ZMQError as exc:
                self.socket.close()
                raise TransportPortError(
                    f"port already in use: {self.port}"
                ) from exc

        self.shutdown = False
        self.thread = threading.Thread(target=self.run, daemon=True)
        self.thread.start()

    def _bind_any(self) -> int:
        for port in range(minimum_port, maximum_port + 1):
            if port in self.avoid:
                continue
            try:
                self.socket.bind(f"tcp://{self.address}:{port}")
                return port
            except zmq.ZMQError:
                continue

        self.socket.close()
        raise TransportPortError(
            f"no ports available in range {minimum_port}:{maximum_port}"
        )

    # --- request handling hooks ---
    def req_handler(self, request: Request) -> Optional[Payload]:
        """Override in subclasses.

        Return:
          - Payload -> will be wrapped into a REP
          - None    -> a REP with an empty value
        """

        return None

    # --- internal ---
    def _req_incoming(self, parts: Tuple[bytes, ...]) -> None:
        try:
            req = from_frames(parts)
        except ValueError as exc:
            logger.warning("discarding malformed request: %s", exc)
            return

        payload: Optional[Payload] = None
        error: Optional[dict] = None

        if isinstance(req, Request):
            try:
                payload = self.req_handler(req)
            except Exception:
                e_class, e_instance, _tb = sys.exc_info()
                logger.warning("%s handler raised %s: %s", req.type, e_class.__name__, e_instance)
                error = {
                    "type": getattr(e_class, "__name__", "Exception"),
                    "text": str(e_instance),
                    "debug": traceback.format_exc(),
                }
        elif req.payload is not None and req.payload.error is not None:
            # Version mismatch, reported back to the sender.
            error = req.payload.error
        else:
            return

        if payload is None:
            payload = Payload(value=None)
        if error is not None:
            payload.error = error

        rep = Message(REP, target=req.target, payload=payload, id=req.id)
        rep.prefix = req.prefix

        try:
            frames = to_frames(rep, include_prefix=True)
        except Exception:
            # The handler produced something that cannot go on the wire;
            # report that to the client instead.
            e_class, e_instance, _tb = sys.exc_info()
            logger.warning("%s reply could not be encoded: %s", req.type, e_instance)
            error = {
                "type": getattr(e_class, "__name__", "Exception"),
                "text": f"reply could not be encoded: {e_instance}",
                "debug": traceback.format_exc(),
            }
            rep.payload = Payload(value=None, error=error)
            frames = to_frames(rep, include_prefix=True)

        self.socket.send_multipart(frames)

    def run(self) -> None:
        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)

        while not self.shutdown:
            for active, _flag in poller.poll(self.poll_interval):
                if active == self.socket:
                    parts = tuple(self.socket.recv_multipart())
                    self._req_incoming(parts)

        self.socket.close()

    def stop(self) -> None:
        self.shutdown = True
        self.thread.join()


# --- convenience helpers ---

_client_cache: Dict[Tuple[str, int], Client] = {}
_client_lock = threading.Lock()


def client(address: str, port: int) -> Client:
    key = (address, int(port))
    with _client_lock:
        c = _client_cache.get(key)
        if c is None or c.socket.closed:
            c = Client(address, int(port))
            _client_cache[key] = c
        return c


def _cleanup() -> None:
    zmq_context.destroy(linger=0)


atexit.register(_cleanup)
