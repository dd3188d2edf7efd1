"""JSON request handler base for the serverless route functions."""

from http.server import BaseHTTPRequestHandler
import json
from typing import Any, Callable, Optional
from urllib.parse import parse_qs, urlsplit

from pydantic import ValidationError

from src.utils.errors import BadRequest, SupabaseError
from src.utils.logging import correlation_context, get_structured_logger
from src.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
logger = get_structured_logger(__name__)


class JsonRequestHandler(BaseHTTPRequestHandler):
    """Vercel handler with JSON helpers and uniform error responses."""

    def send_json(self, status: int, payload: Any) -> None:
        body = json.dumps(payload).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def read_json(self) -> Any:
        """Decode the request body; 400 when it is missing or not JSON."""
        try:
            content_length = int(self.headers.get('Content-Length', 0))
        except ValueError:
            raise BadRequest(400, "invalid Content-Length")
        raw_body = self.rfile.read(content_length).decode('utf-8') if content_length > 0 else ""
        if not raw_body:
            raise BadRequest(400, "request body required")
        try:
            return json.loads(raw_body)
        except json.JSONDecodeError as e:
            raise BadRequest(400, f"invalid JSON: {e.msg}")

    @property
    def route_path(self) -> str:
        return urlsplit(self.path).path

    def query_param(self, name: str) -> Optional[str]:
        """First value of a query parameter; blank values are kept as ""."""
        values = parse_qs(urlsplit(self.path).query, keep_blank_values=True).get(name)
        return values[0] if values else None

    def respond(self, action: Callable[[], tuple[int, Any]]) -> None:
        """Run a route action and write its (status, payload) or the mapped error."""
        incoming_id = self.headers.get(LoggingConfig.LOG_CORRELATION_ID_HEADER)
        with correlation_context(incoming_id):
            try:
                status, payload = action()
            except BadRequest as e:
                logger.warning("Request rejected", method=self.command, route=self.route_path, error=e.message)
                body = {"error": e.message}
                if e.fields:
                    body["fields"] = e.fields
                self.send_json(e.status, body)
                return
            except ValidationError as e:
                logger.warning("Request failed validation", method=self.command, route=self.route_path)
                self.send_json(422, {
                    "error": "validation failed",
                    "fields": {".".join(str(p) for p in err["loc"]): err["msg"] for err in e.errors()},
                })
                return
            except SupabaseError as e:
                logger.error("Storage error", method=self.command, route=self.route_path, error=str(e))
                self.send_json(500, {"error": "storage error"})
                return
            except Exception as e:
                logger.exception("Unhandled route error", method=self.command, route=self.route_path, error=str(e))
                self.send_json(500, {"error": "internal server error"})
                return

            self.send_json(status, payload)

    def not_found(self) -> None:
        self.send_json(404, {"error": f"no route for {self.command} {self.route_path}"})

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("HTTP access", access_line=format % args)
