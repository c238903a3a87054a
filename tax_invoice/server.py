"""HTTP service around the invoice renderer.

Requests are handled on threads; the renders themselves run in a pool of
spawned worker processes so a slow or crashing render never takes the
listener down with it.
"""

from __future__ import annotations

import json
import logging
import multiprocessing as mp
import threading
from concurrent.futures import Future, ProcessPoolExecutor, TimeoutError as FutureTimeoutError
from concurrent.futures.process import BrokenProcessPool
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Optional, Tuple, cast

from .config import (
    AssetConfig,
    LISTEN_BACKLOG,
    MAX_BODY_BYTES as MAX_BODY_BYTES_CONFIG,
    MAX_CONCURRENT_RENDERS,
    MAX_INFLIGHT_RENDERS,
    MAX_ITEMS as MAX_ITEMS_CONFIG,
    RENDER_QUEUE_TIMEOUT_MS,
    RENDER_TIMEOUT_MS,
    load_asset_config,
)
from .net import CORS_HEADERS, attachment_header, is_client_disconnect
from .sample import create_invoice_data

logger = logging.getLogger(__name__)

PDF_FILENAME = "invoice.pdf"
DOCUMENT_SECTIONS = ("company", "invoice", "bank")
HEALTH_PATHS = ("/health", "/healthz", "/ready")
RENDER_PATHS = ("/invoice", "/generate")
ValidationError = Tuple[int, Dict[str, Any]]


class DependencyError(RuntimeError):
    """Raised when a required runtime dependency is missing."""


def load_render_invoice():
    try:
        from .rendering import render_invoice
    except ModuleNotFoundError as exc:
        if exc.name in ("fpdf", "PIL"):
            raise DependencyError(
                f"Missing dependency '{exc.name}'. Install the project with 'pip install -e .'."
            ) from exc
        raise
    return render_invoice


class RenderPool:
    """Spawned worker processes that turn invoice records into PDF bytes.

    ``slots`` bounds how many requests may be waiting on the pool at once;
    the executor itself is created lazily and replaced if a worker dies.
    """

    def __init__(
        self,
        assets: AssetConfig,
        workers: int = MAX_CONCURRENT_RENDERS,
        inflight: int = MAX_INFLIGHT_RENDERS,
    ) -> None:
        self.assets = assets
        self.workers = workers
        self.slots = threading.BoundedSemaphore(inflight)
        self._lock = threading.Lock()
        self._executor: Optional[ProcessPoolExecutor] = None

    def _spawn(self) -> ProcessPoolExecutor:
        return ProcessPoolExecutor(max_workers=self.workers, mp_context=mp.get_context("spawn"))

    def executor(self) -> ProcessPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = self._spawn()
            return self._executor

    def restart(self, broken: ProcessPoolExecutor) -> ProcessPoolExecutor:
        with self._lock:
            if self._executor is broken:
                try:
                    broken.shutdown(wait=False, cancel_futures=True)
                except RuntimeError:
                    logger.debug("Render pool shutdown raised", exc_info=True)
                self._executor = None
            if self._executor is None:
                self._executor = self._spawn()
            return self._executor

    def submit(self, payload: Dict[str, Any]) -> Future:
        render_invoice = load_render_invoice()
        executor = self.executor()
        try:
            return executor.submit(render_invoice, payload, self.assets)
        except BrokenProcessPool:
            # The job never started; only the pool is replaced.
            return self.restart(executor).submit(render_invoice, payload, self.assets)

    def shutdown(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)


def _rejection(status: int, error: str, detail: str, **extra: Any) -> ValidationError:
    return status, {"error": error, "detail": detail, **extra}


def validate_invoice_payload(
    body: bytes,
    max_items: int,
) -> Tuple[Optional[Dict[str, Any]], Optional[ValidationError]]:
    """Decode a POSTed invoice record and check it fits on one page."""
    try:
        payload = json.loads(body.decode("utf-8"))
    except UnicodeDecodeError:
        return None, _rejection(400, "invalid_encoding", "Body must be UTF-8 encoded JSON.")
    except json.JSONDecodeError as exc:
        return None, _rejection(400, "invalid_json", f"{exc.msg} (line {exc.lineno}, column {exc.colno})")

    if not isinstance(payload, dict):
        return None, _rejection(400, "invalid_payload", "JSON root must be an object.")

    for section in DOCUMENT_SECTIONS:
        value = payload.get(section)
        if value is not None and not isinstance(value, dict):
            return None, _rejection(400, "invalid_payload", f"'{section}' must be an object.")

    items = (payload.get("invoice") or {}).get("items") or []
    if not isinstance(items, list):
        return None, _rejection(400, "invalid_payload", "'invoice.items' must be an array.")

    if len(items) > max_items:
        return None, _rejection(
            413,
            "invoice_too_large",
            f"Invoice has {len(items)} items; a single page holds at most {max_items}.",
            max_items=max_items,
        )
    return payload, None


class InvoiceHandler(BaseHTTPRequestHandler):
    MAX_BODY_BYTES = MAX_BODY_BYTES_CONFIG
    MAX_ITEMS = MAX_ITEMS_CONFIG

    server: "InvoiceHTTPServer"

    def _write_response(
        self,
        status: int,
        content_type: str,
        body: bytes,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> bool:
        headers = {"Content-Type": content_type, "Content-Length": str(len(body)), **CORS_HEADERS}
        headers.update(extra_headers or {})
        try:
            self.send_response(status)
            for name, value in headers.items():
                self.send_header(name, value)
            self.end_headers()
            self.wfile.write(body)
            return True
        except Exception as exc:
            if is_client_disconnect(exc):
                return False
            raise

    def _send_json(self, status: int, payload: Dict[str, Any]) -> bool:
        return self._write_response(status, "application/json", json.dumps(payload).encode("utf-8"))

    def _send_error(self, status: int, error: str, detail: str, **extra: Any) -> bool:
        return self._send_json(*_rejection(status, error, detail, **extra))

    def _read_body(self) -> Optional[bytes]:
        header = self.headers.get("Content-Length")
        if header is None:
            self._send_error(411, "missing_content_length", "Content-Length header is required.")
            return None

        try:
            length = int(header)
        except ValueError:
            self._send_error(400, "invalid_content_length", "Content-Length must be an integer.")
            return None

        if length <= 0:
            self._send_error(400, "empty_body", "Request body cannot be empty.")
            return None
        if length > self.MAX_BODY_BYTES:
            self._send_error(413, "payload_too_large", f"Body exceeds {self.MAX_BODY_BYTES} bytes.")
            return None

        try:
            return self.rfile.read(length)
        except Exception as exc:
            if is_client_disconnect(exc):
                return None
            raise

    def _render_and_send(self, payload: Dict[str, Any]) -> None:
        pool = self.server.pool
        if not pool.slots.acquire(timeout=RENDER_QUEUE_TIMEOUT_MS / 1000.0):
            self._send_error(
                503,
                "server_busy",
                "Render queue is full; retry shortly.",
                retry_after_ms=RENDER_QUEUE_TIMEOUT_MS,
            )
            return

        future = None
        try:
            future = pool.submit(payload)
            pdf_bytes = future.result(timeout=RENDER_TIMEOUT_MS / 1000.0)
        except FutureTimeoutError:
            if future is not None:
                future.cancel()
            logger.error("Render of invoice exceeded %d ms", RENDER_TIMEOUT_MS)
            self._send_error(504, "render_timeout", f"Render exceeded timeout of {RENDER_TIMEOUT_MS} ms.")
            return
        except BrokenProcessPool:
            logger.error("Render worker pool died; restarting it")
            pool.restart(pool.executor())
            self._send_error(503, "render_pool_restarting", "Render worker pool restarted; retry shortly.")
            return
        except Exception:
            logger.exception("Invoice render failed")
            self._send_json(500, {"message": "Internal server error"})
            return
        finally:
            pool.slots.release()

        self._write_response(
            200,
            "application/pdf",
            pdf_bytes,
            {"Content-Disposition": attachment_header(PDF_FILENAME)},
        )

    def do_OPTIONS(self) -> None:
        self._write_response(204, "text/plain", b"")

    def do_POST(self) -> None:
        if self.path not in RENDER_PATHS:
            self._send_error(404, "not_found", "Unsupported endpoint.")
            return

        body = self._read_body()
        if body is None:
            return

        payload, rejection = validate_invoice_payload(body, self.MAX_ITEMS)
        if rejection is not None:
            self._send_json(*rejection)
            return

        self._render_and_send(cast(Dict[str, Any], payload))

    def do_GET(self) -> None:
        if self.path in HEALTH_PATHS:
            self._send_json(200, {"status": "ok"})
        elif self.path == "/invoice":
            # The deployment's own record; nothing is read from the request.
            self._render_and_send(create_invoice_data())
        else:
            self._send_error(404, "not_found", "Unsupported endpoint.")

    def handle_one_request(self) -> None:
        try:
            super().handle_one_request()
        except Exception as exc:
            if is_client_disconnect(exc):
                return
            raise

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


class InvoiceHTTPServer(ThreadingHTTPServer):
    daemon_threads = True
    allow_reuse_address = True
    request_queue_size = LISTEN_BACKLOG

    def __init__(self, address: Tuple[str, int], assets: AssetConfig) -> None:
        super().__init__(address, InvoiceHandler)
        self.assets = assets
        self.pool = RenderPool(assets)

    def server_close(self) -> None:
        super().server_close()
        self.pool.shutdown()


def run(host: str = "0.0.0.0", port: int = 5000) -> None:
    load_render_invoice()
    server = InvoiceHTTPServer((host, port), load_asset_config())
    server.pool.executor()
    logger.info("Invoice service ready on http://%s:%d", host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down invoice service")
    finally:
        server.server_close()
