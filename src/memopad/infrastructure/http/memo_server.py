"""Memo HTTP server."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from aiohttp import web
from jinja2 import Environment, PackageLoader, select_autoescape

from memopad.domain.entities.memo import (
    DEFAULT_CATEGORIES,
    MEMO_CATEGORIES,
    category_color,
    category_label,
)
from memopad.domain.exceptions import ValidationError
from memopad.infrastructure.persistence.exceptions import MemoNotFoundError, StoreError
from memopad.infrastructure.persistence.memo_mapper import (
    memo_to_payload,
    payload_to_form,
)

if TYPE_CHECKING:
    from memopad.domain.repositories.memo_repository import MemoRepository
    from memopad.infrastructure.persistence.database import DatabaseManager

logger = logging.getLogger(__name__)


def format_timestamp(timestamp: datetime) -> str:
    """Format datetime to readable string.

    Args:
        timestamp: datetime object.

    Returns:
        Formatted string in YYYY-MM-DD HH:MM format.
    """
    return timestamp.strftime("%Y-%m-%d %H:%M")


def create_jinja_env() -> Environment:
    """Create Jinja2 environment for page templates.

    Loads templates from the memopad.infrastructure.http templates package
    and registers the memo display filters.

    Returns:
        Configured Jinja2 environment.
    """
    env = Environment(
        loader=PackageLoader("memopad.infrastructure.http", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["format_timestamp"] = format_timestamp
    env.filters["category_label"] = category_label
    env.filters["category_color"] = category_color
    return env


def _error_response(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


class MemoServer:
    """HTTP server for the memo API and index page.

    Provides the memo CRUD endpoints under /api and the /live, /ready health checks.
    """

    def __init__(
        self,
        repository: MemoRepository,
        db_manager: DatabaseManager,
        host: str = "0.0.0.0",
        port: int = 8080,
    ) -> None:
        """Initialize the memo server.

        Args:
            repository: MemoRepository used by every endpoint.
            db_manager: DatabaseManager used by the readiness check.
            host: Interface to bind.
            port: Port to listen on. Use 0 for any available port.
        """
        self._repository = repository
        self._db_manager = db_manager
        self._host = host
        self._port = port
        self._actual_port = port
        self._jinja_env = create_jinja_env()
        self._server: web.AppRunner | None = None
        self._site: web.TCPSite | None = None
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if the server is running."""
        return self._running

    @property
    def port(self) -> int:
        """Get the port the server is listening on."""
        return self._actual_port

    def create_app(self) -> web.Application:
        """Build the aiohttp application with all routes registered."""
        app = web.Application()
        app.router.add_get("/", self._handle_index)
        app.router.add_get("/api/categories", self._handle_categories)
        app.router.add_get("/api/memos", self._handle_list)
        app.router.add_post("/api/memos", self._handle_create)
        app.router.add_put("/api/memos/{memo_id}", self._handle_update)
        app.router.add_delete("/api/memos/{memo_id}", self._handle_delete)
        app.router.add_get("/live", self._handle_live)
        app.router.add_get("/ready", self._handle_ready)
        return app

    async def check_readiness(self) -> dict[str, Any]:
        """Check if the database is reachable.

        Returns:
            Readiness status with component health details.
        """
        db_ok = await self._db_manager.is_healthy()
        return {"ready": db_ok, "database": db_ok}

    async def _handle_index(self, request: web.Request) -> web.Response:
        """Handle / by rendering the memo list page."""
        try:
            memos = await self._repository.list()
        except StoreError as e:
            return self._render("error.html", status=500, message=str(e))
        return self._render("index.html", memos=memos)

    def _render(self, name: str, status: int = 200, **context: Any) -> web.Response:
        html = self._jinja_env.get_template(name).render(**context)
        return web.Response(text=html, status=status, content_type="text/html")

    async def _handle_categories(self, request: web.Request) -> web.Response:
        """Handle GET /api/categories."""
        return web.json_response(
            [
                {"value": value, "label": MEMO_CATEGORIES[value]}
                for value in DEFAULT_CATEGORIES
            ]
        )

    async def _handle_list(self, request: web.Request) -> web.Response:
        """Handle GET /api/memos."""
        try:
            memos = await self._repository.list()
        except StoreError as e:
            return _error_response(str(e), 500)
        return web.json_response([memo_to_payload(memo) for memo in memos])

    async def _handle_create(self, request: web.Request) -> web.Response:
        """Handle POST /api/memos."""
        try:
            form = payload_to_form(await request.json())
            form.validate()
        except ValueError:
            return _error_response("Request body is not valid JSON", 400)
        except ValidationError as e:
            return _error_response(str(e), 400)

        try:
            memo = await self._repository.create(form)
        except StoreError as e:
            return _error_response(str(e), 500)
        logger.info("Created memo %s", memo.id)
        return web.json_response(memo_to_payload(memo), status=201)

    async def _handle_update(self, request: web.Request) -> web.Response:
        """Handle PUT /api/memos/{memo_id}."""
        memo_id = request.match_info["memo_id"]
        try:
            form = payload_to_form(await request.json())
            form.validate()
        except ValueError:
            return _error_response("Request body is not valid JSON", 400)
        except ValidationError as e:
            return _error_response(str(e), 400)

        try:
            memo = await self._repository.update(memo_id, form)
        except MemoNotFoundError as e:
            return _error_response(str(e), 404)
        except StoreError as e:
            return _error_response(str(e), 500)
        logger.info("Updated memo %s", memo.id)
        return web.json_response(memo_to_payload(memo))

    async def _handle_delete(self, request: web.Request) -> web.Response:
        """Handle DELETE /api/memos/{memo_id}."""
        memo_id = request.match_info["memo_id"]
        try:
            await self._repository.delete(memo_id)
        except StoreError as e:
            return _error_response(str(e), 500)
        logger.info("Deleted memo %s", memo_id)
        return web.Response(status=204)

    async def _handle_live(self, request: web.Request) -> web.Response:
        """Handle /live endpoint."""
        return web.json_response(
            {
                "status": "alive" if self._running else "dead",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )

    async def _handle_ready(self, request: web.Request) -> web.Response:
        """Handle /ready endpoint."""
        result = await self.check_readiness()
        status = 200 if result["ready"] else 503
        return web.json_response(result, status=status)

    async def start(self) -> None:
        """Start the HTTP server."""
        self._server = web.AppRunner(self.create_app())
        await self._server.setup()

        self._site = web.TCPSite(self._server, self._host, self._port)
        await self._site.start()

        # Get actual port (useful when port=0 for dynamic allocation)
        if self._site._server is not None:
            sockets = self._site._server.sockets  # type: ignore[union-attr]
            if sockets:
                self._actual_port = sockets[0].getsockname()[1]

        self._running = True
        logger.info("Memo server started on port %d", self.port)

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self._server is not None:
            await self._server.cleanup()
            self._server = None
            self._site = None

        self._running = False
        logger.info("Memo server stopped")
