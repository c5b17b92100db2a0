"""
Simple TCP REPL server for callisp.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(def x 3) (+ x 1)"}
- Response: {"ok": true, "result": <printed last value>} or {"ok": false, "error": <message>}

A single Interpreter is kept alive so that definitions persist across
evaluations. Connections are served one thread each, but evaluation is
serialized through a lock since the interpreter is single-threaded.
"""

from __future__ import annotations

import argparse
import json
import logging
import socket
import threading
from typing import Tuple

from callisp.errors import CallispError
from callisp.interpreter import Interpreter
from callisp.printer import to_lisp_string

logger = logging.getLogger("callisp.repl_server")

HOST = "127.0.0.1"
PORT = 8765


class ReplServer:
    def __init__(self, host: str = HOST, port: int = PORT, interp: Interpreter | None = None):
        self.host = host
        self.port = port
        self.interp = interp if interp is not None else Interpreter(prelude=None)
        self._lock = threading.Lock()

    def handle_request(self, line: bytes) -> dict:
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        if not isinstance(req, dict) or req.get("cmd") != "eval":
            cmd = req.get("cmd") if isinstance(req, dict) else req
            return {"ok": False, "error": f"Unknown cmd: {cmd}"}
        code = req.get("code", "")
        try:
            with self._lock:
                result = self.interp.eval(code)
        except (CallispError, RecursionError) as ex:
            logger.debug("eval failed", exc_info=ex)
            return {"ok": False, "error": str(ex)}
        except SystemExit:
            # clients share one interpreter, so exit is refused
            return {"ok": False, "error": "exit is not available in the REPL server"}
        return {"ok": True, "result": to_lisp_string(result)}

    def serve_forever(self):
        listener = socket.create_server((self.host, self.port))
        with listener:
            logger.info("listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = listener.accept()
                worker = threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True)
                worker.start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.debug("client connected: %s:%d", *addr)
        # one request per line; blank lines are ignored
        with conn, conn.makefile("rb") as reader:
            for raw in reader:
                request = raw.strip()
                if request:
                    reply = json.dumps(self.handle_request(request)) + "\n"
                    conn.sendall(reply.encode("utf-8"))
        logger.debug("client disconnected: %s:%d", *addr)


def main(argv: list[str] | None = None):
    from callisp.config import get_log_level
    from callisp.log_support import setup_loggers

    parser = argparse.ArgumentParser(prog="callisp-repl-server", description="JSON-per-line TCP REPL for callisp")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    args = parser.parse_args(argv)
    setup_loggers(get_log_level())
    ReplServer(args.host, args.port).serve_forever()


if __name__ == "__main__":
    main()
