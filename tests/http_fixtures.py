"""Tiny local HTTP server answering HEAD requests by path."""

import threading
import time
from collections import Counter
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

SLOW_SECONDS = 2.0
HOP_SECONDS = 0.6


class Handler(BaseHTTPRequestHandler):
    def log_message(self, *args):
        pass

    def do_HEAD(self):
        server = self.server
        path = self.path.split("?", 1)[0]
        with server.lock:
            server.hits[path] += 1
            server.agents.append(self.headers.get("User-Agent"))

        if path.startswith("/ok"):
            self.reply(200)
        elif path.startswith("/missing"):
            self.reply(404)
        elif path.startswith("/down"):
            self.reply(503)
        elif path.startswith("/teapot"):
            self.reply(418)
        elif path.startswith("/redirect"):
            self.reply(302, {"Location": "/ok/after-redirect"})
        elif path.startswith("/dead-redirect"):
            self.reply(301, {"Location": "/missing/after-redirect"})
        elif path.startswith("/loop"):
            self.reply(302, {"Location": path})
        elif path.startswith("/chain/"):
            # /chain/N: wait HOP_SECONDS, then redirect to /chain/N-1; /chain/0 answers 200
            hops = int(path.rsplit("/", 1)[-1])
            time.sleep(HOP_SECONDS)
            if hops > 0:
                self.reply(302, {"Location": f"/chain/{hops - 1}"})
            else:
                self.reply(200)
        elif path.startswith("/slow"):
            time.sleep(SLOW_SECONDS)
            self.reply(200)
        else:
            self.reply(404)

    def reply(self, status, headers=None):
        self.send_response(status)
        for key, value in (headers or {}).items():
            self.send_header(key, value)
        self.send_header("Content-Length", "0")
        self.end_headers()


class StubServer(ThreadingHTTPServer):
    daemon_threads = True
    block_on_close = False

    def __init__(self):
        super().__init__(("127.0.0.1", 0), Handler)
        self.lock = threading.Lock()
        self.hits = Counter()
        self.agents = []
        self.thread = threading.Thread(target=self.serve_forever, daemon=True)

    @property
    def base_url(self):
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"

    def url(self, path):
        return self.base_url + path

    def start(self):
        self.thread.start()
        return self

    def stop(self):
        self.shutdown()
        self.server_close()

    def handle_error(self, request, client_address):
        # clients that timed out hang up on /slow before the reply
        pass

    def reset(self):
        with self.lock:
            self.hits.clear()
            self.agents.clear()


# nothing listens here, connections are refused
REFUSED_URL = "http://127.0.0.1:1/refused"
