"""HTTP front end that renders Mandelbrot images on request."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Mapping, Sequence, TypeVar
from urllib.parse import parse_qs, urlsplit

from .config import DEFAULT_CONFIG, RenderConfig
from .errors import MandelfillError
from .output import adjust_image, encode_image, filename_with_flags, save_image
from .renderer import render

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

_CONTENT_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
}

RESPONSE_CONTRAST = 20
RESPONSE_BRIGHTNESS = 20
SAVE_QUALITY = 75


def get_query_param(query: Mapping[str, Sequence[str]], key: str, default: T) -> T:
    """Return ``query[key]`` converted to the type of ``default``.

    Missing, empty or malformed values yield ``default``.
    """

    values = query.get(key)
    value = values[0] if values else ""
    if value == "":
        return default

    if isinstance(default, bool):
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        return default
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            return default
    if isinstance(default, float):
        try:
            return float(value)
        except ValueError:
            return default
    if isinstance(default, str):
        return value
    return default


@dataclass(frozen=True)
class ServerDefaults:
    """Fallback values for query parameters the client leaves out."""

    config: RenderConfig = DEFAULT_CONFIG
    out: str = ".png"
    save_path: Path = field(default_factory=lambda: Path("./img/web-colored.jpg"))


def config_from_query(query: Mapping[str, Sequence[str]], defaults: RenderConfig) -> RenderConfig:
    return RenderConfig(
        width=get_query_param(query, "width", defaults.width),
        height=get_query_param(query, "height", defaults.height),
        max_iterations=get_query_param(query, "iterations", defaults.max_iterations),
        threshold=get_query_param(query, "threshold", float(defaults.threshold)),
        workers=get_query_param(query, "workers", defaults.workers),
        scale=get_query_param(query, "scale", defaults.scale),
        fill_mode=get_query_param(query, "mode", str(getattr(defaults.fill_mode, "value", defaults.fill_mode))),
        zoom=get_query_param(query, "zoom", float(defaults.zoom)),
        smooth=get_query_param(query, "smooth", bool(defaults.smooth)),
        offset_x=get_query_param(query, "offsetX", float(defaults.offset_x)),
        offset_y=get_query_param(query, "offsetY", float(defaults.offset_y)),
        hue_offset=get_query_param(query, "hue", float(defaults.hue_offset)),
    )


class MandelbrotRequestHandler(BaseHTTPRequestHandler):
    defaults: ServerDefaults = ServerDefaults()

    def do_GET(self) -> None:
        start = time.perf_counter()
        url = urlsplit(self.path)
        try:
            if url.path == "/mandelbrot":
                self._handle_mandelbrot(parse_qs(url.query, keep_blank_values=True))
            else:
                self._send(HTTPStatus.OK, f"Hello, {url.path!r}".encode(), "text/plain; charset=utf-8")
        finally:
            if url.path != "/favicon.ico":
                logger.info(
                    "%s %.3fms %s %s",
                    self.command,
                    (time.perf_counter() - start) * 1000.0,
                    self.path,
                    self.request_version,
                )

    def _handle_mandelbrot(self, query: Mapping[str, Sequence[str]]) -> None:
        defaults = self.defaults
        out = get_query_param(query, "out", defaults.out)
        extension = out.lower() if out.startswith(".") else "." + out.lower()
        save = get_query_param(query, "save", False)
        config = config_from_query(query, defaults.config)

        try:
            result = render(config, defaults=defaults.config)
            image = adjust_image(result.to_image(), contrast=RESPONSE_CONTRAST, brightness=RESPONSE_BRIGHTNESS)
            body = encode_image(image, extension)
        except MandelfillError as exc:
            self._send(HTTPStatus.BAD_REQUEST, str(exc).encode(), "text/plain; charset=utf-8")
            return
        except Exception as exc:
            logger.exception("render failed")
            self._send(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc).encode(), "text/plain; charset=utf-8")
            return

        if save:
            filename = filename_with_flags(defaults.save_path, result.config)
            try:
                save_image(image, filename, quality=SAVE_QUALITY)
            except (OSError, MandelfillError):
                logger.exception("could not save %s", filename)

        self._send(HTTPStatus.OK, body, _CONTENT_TYPES[extension])

    def _send(self, status: HTTPStatus, body: bytes, content_type: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:
        # requests are logged by do_GET with timing
        pass


def make_server(host: str = "", port: int = 8080, defaults: ServerDefaults | None = None) -> ThreadingHTTPServer:
    """Create (but do not start) a threaded server bound to ``host:port``."""

    handler = type(
        "ConfiguredMandelbrotRequestHandler",
        (MandelbrotRequestHandler,),
        {"defaults": defaults or ServerDefaults()},
    )
    return ThreadingHTTPServer((host, port), handler)


def serve(host: str = "", port: int = 8080, defaults: ServerDefaults | None = None) -> None:
    server = make_server(host, port, defaults)
    logger.info("Server running on port :%d", server.server_address[1])
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        server.server_close()
