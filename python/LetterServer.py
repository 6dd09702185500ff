import json
import logging
import socket

logger = logging.getLogger(__name__)


def encode_snapshot(hands, fps=None):
    """One newline-terminated JSON document per frame."""
    msg = json.dumps({"hands": [h.to_dict() for h in hands], "fps": fps}) + "\n"
    return msg.encode("utf-8")


class LetterServer:
    """
    TCP publisher for per-frame letter snapshots.
    Accepts a single client without blocking the classifier loop; a
    disconnected client is dropped and the server keeps listening.
    """

    def __init__(self, host="127.0.0.1", port=5555):
        self.addr = (host, port)
        self.sock = None
        self.conn = None

    def start(self):
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.bind(self.addr)
        self.sock.listen(1)
        self.sock.setblocking(False)  # Non-blocking accept
        logger.info("[NET] Listening on %s:%d ...", *self.addr)

    def poll(self):
        """Check for new connections non-blockingly"""
        if self.conn is not None or self.sock is None:
            return
        try:
            self.conn, addr = self.sock.accept()
        except BlockingIOError:
            return
        self.conn.setblocking(True)  # Blocking sends
        logger.info("[NET] Client connected: %s", addr)

    def send_hands(self, hands, fps=None):
        """
        hands: list of HandData
        Returns True when the snapshot was delivered.
        """
        if self.conn is None:
            return False
        try:
            self.conn.sendall(encode_snapshot(hands, fps))
        except (BrokenPipeError, ConnectionResetError):
            logger.warning("[NET] Client disconnected")
            self._drop_client()
            return False
        return True

    def _drop_client(self):
        if self.conn is not None:
            try:
                self.conn.close()
            except OSError:
                pass
            self.conn = None

    def close(self):
        self._drop_client()
        if self.sock is not None:
            self.sock.close()
            self.sock = None
