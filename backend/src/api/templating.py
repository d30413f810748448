"""Jinja2 page rendering."""
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from views.notices import NoticeHolder

# Page each template is served at, used for links back to the page
PAGE_PATHS = {
    "signup.html": "/signup",
    "login.html": "/login",
    "dashboard.html": "/dashboard",
}

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def render(
    request: Request,
    name: str,
    view: NoticeHolder,
    status_code: int = 200,
    **context: Any,
) -> HTMLResponse:
    """Render a page for a view. The view's pending notice is shown once."""
    return templates.TemplateResponse(
        request,
        name,
        {
            "app_name": request.app.state.settings.app_name,
            "view": view,
            "notice": view.take_notice(),
            "page_path": PAGE_PATHS.get(name, request.url.path),
            **context,
        },
        status_code=status_code,
    )


def redirect(path: str) -> RedirectResponse:
    """See-other redirect, so a POST is followed by a GET."""
    return RedirectResponse(path, status_code=303)
