"""XFile Manager web app.

FastAPI application serving the HTML directory listing, the installer page,
the JSON API under ``/api/v1`` and the root directory itself as static files
under ``/files``.
"""

import logging
from datetime import datetime
from pathlib import Path

try:
    import uvicorn
    from fastapi import APIRouter, Depends, FastAPI, Form, Request
    from fastapi.responses import HTMLResponse
    from fastapi.staticfiles import StaticFiles
    from fastapi.templating import Jinja2Templates
    from starlette.exceptions import HTTPException as StarletteHTTPException
except ImportError as _exc:
    raise ImportError(
        "Web dependencies (fastapi, uvicorn, jinja2, python-multipart) are required "
        "but not installed. Reinstall with: pip install --upgrade xfilemanager"
    ) from _exc

from xfilemanager.api.deps import get_app_settings, get_browser, get_installer
from xfilemanager.api.v1 import mount_v1_routers
from xfilemanager.browser import DirectoryBrowser, DirectoryScanner, ViewMode
from xfilemanager.browser.formatting import (
    FILES_MOUNT,
    entry_link,
    file_icon,
    format_date,
    format_file_size,
    icon_class,
    listing_url,
)
from xfilemanager.config import Settings, get_settings
from xfilemanager.dashboard_auth import require_localhost, require_same_origin
from xfilemanager.installer import Installer

logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).parent / "frontend"
TEMPLATES_DIR = FRONTEND_DIR / "templates"
STATIC_DIR = FRONTEND_DIR / "static"

APP_TITLE = "XFile Manager"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["filesize"] = format_file_size
templates.env.filters["datefmt"] = format_date
templates.env.filters["icon_class"] = icon_class

pages_router = APIRouter()


class RootStaticFiles(StaticFiles):
    """Static files for the served root that refuse hidden names.

    Anything the listing hides (``.htaccess``, ``.git/...``) is a 404 here too.
    """

    def __init__(self, *, settings: Settings, **kwargs):
        super().__init__(directory=settings.root_dir, **kwargs)
        self._scanner = DirectoryScanner(settings)

    async def get_response(self, path: str, scope):
        parts = [part for part in Path(path).parts if part not in (".", "")]
        if any(self._scanner.is_hidden(part) for part in parts):
            raise StarletteHTTPException(status_code=404)
        return await super().get_response(path, scope)


async def security_headers_middleware(request: Request, call_next):
    """Add security headers to all responses."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    if request.url.path.startswith(FILES_MOUNT + "/"):
        # Served user content keeps its own framing and script rules.
        return response
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Permissions-Policy"] = "camera=(), microphone=(), geolocation=()"
    response.headers["Content-Security-Policy"] = (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline'; "
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net https://fonts.googleapis.com; "
        "font-src 'self' https://fonts.gstatic.com https://cdn.jsdelivr.net; "
        "img-src 'self' data:; "
        "frame-ancestors 'none'"
    )
    return response


# ==================== Pages ====================


@pages_router.get("/", response_class=HTMLResponse)
def browse_page(
    request: Request,
    path: str = "",
    view: str | None = None,
    browser: DirectoryBrowser = Depends(get_browser),
    settings: Settings = Depends(get_app_settings),
):
    """Render the listing for ``path`` in grid or list layout."""
    mode = ViewMode.parse(view, ViewMode(settings.default_view))
    listing = browser.browse(path)
    location = listing.location

    items = [
        {"entry": entry, "icon": file_icon(entry), "link": entry_link(entry, mode)}
        for entry in listing.entries
    ]
    breadcrumbs = [
        {"crumb": crumb, "url": listing_url(crumb.path, mode)} for crumb in location.breadcrumbs
    ]

    return templates.TemplateResponse(
        request,
        "browse.html",
        {
            "app_title": APP_TITLE,
            "location": location,
            "breadcrumbs": breadcrumbs,
            "items": items,
            "count": listing.count,
            "view": mode.value,
            "grid_url": listing_url(location.relative, ViewMode.GRID),
            "list_url": listing_url(location.relative, ViewMode.LIST),
            "date_format": settings.date_format,
            "year": datetime.now().year,
        },
    )


def _render_install_page(request: Request, installer: Installer, report=None, selected=()):
    return templates.TemplateResponse(
        request,
        "install.html",
        {
            "app_title": APP_TITLE,
            "root": str(installer.root),
            "candidates": installer.candidates(),
            "selected": set(selected),
            "report": report,
        },
    )


@pages_router.get(
    "/install", response_class=HTMLResponse, dependencies=[Depends(require_localhost)]
)
def install_page(request: Request, installer: Installer = Depends(get_installer)):
    """Checklist of subdirectories that can receive the deployment files."""
    return _render_install_page(request, installer)


@pages_router.post(
    "/install",
    response_class=HTMLResponse,
    dependencies=[Depends(require_localhost), Depends(require_same_origin)],
)
def install_submit(
    request: Request,
    directories: list[str] = Form(default=[]),
    installer: Installer = Depends(get_installer),
):
    """Run the installer on the checked directories and show the summary."""
    report = installer.install(directories)
    logger.info(
        "Install finished: %d installed, %d skipped, %d failed",
        report.installed,
        report.skipped,
        report.failed,
    )
    return _render_install_page(request, installer, report=report, selected=directories)


# ==================== App factory ====================


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the web app bound to *settings* (process-wide settings by default)."""
    settings = settings or get_settings()

    app = FastAPI(
        title=f"{APP_TITLE} API",
        description="Directory browser and file server for a local document root.",
        version="1.0.0",
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )
    app.state.settings = settings

    app.middleware("http")(security_headers_middleware)

    mount_v1_routers(app)
    app.include_router(pages_router)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.mount(FILES_MOUNT, RootStaticFiles(settings=settings), name="files")

    logger.debug("App created for root %s", settings.root_dir)
    return app


def run_dashboard(
    host: str = "127.0.0.1",
    port: int = 8080,
    dev: bool = False,
) -> None:
    """Run the web server."""
    settings = get_settings()

    print("\n" + "=" * 50)
    print(f"\U0001f4c1 {APP_TITLE.upper()}")
    print("=" * 50)
    print(f"\n\U0001f4c2 Serving {settings.root_dir.resolve()}")
    if dev:
        print("\U0001f504 Development mode, auto-reload enabled")
    if host == "0.0.0.0":
        print(f"\U0001f310 Listening on all interfaces ({host}:{port})\n")
    else:
        print(f"\U0001f310 Open http://localhost:{port} in your browser\n")

    if dev:
        src_dir = str(Path(__file__).resolve().parent)
        uvicorn.run(
            "xfilemanager.dashboard:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            reload_dirs=[src_dir],
            reload_includes=["*.py", "*.html", "*.css"],
            log_level="debug",
        )
    else:
        uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
