"""Dashboard pages: list, save and delete links."""
from fastapi import APIRouter, Depends, Form, Request, Response

from api.dependencies import get_browser_session
from api.guards import Access, guard
from api.templating import redirect, render
from core.sessions import BrowserSession

router = APIRouter(tags=["dashboard"])


@router.get("/")
async def home(session: BrowserSession = Depends(get_browser_session)) -> Response:
    """Send visitors to the dashboard or, when signed out, to the login page."""
    return redirect(guard(session.context.state, Access.AUTHENTICATED) or "/dashboard")


@router.get("/dashboard")
async def dashboard_page(
    request: Request,
    session: BrowserSession = Depends(get_browser_session),
) -> Response:
    """Show the user's links. Entering the page loads the list from the backend."""
    target = guard(session.context.state, Access.AUTHENTICATED)
    if target:
        return redirect(target)

    view = session.dashboard
    await view.mount()
    return render(request, "dashboard.html", view)


@router.post("/dashboard/links")
async def create_link(
    request: Request,
    url: str = Form(default=""),
    title: str = Form(default=""),
    session: BrowserSession = Depends(get_browser_session),
) -> Response:
    """Save a link; the new link is shown at the top of the list."""
    target = guard(session.context.state, Access.AUTHENTICATED)
    if target:
        return redirect(target)

    view = session.dashboard
    await view.ensure_loaded()
    created = await view.create(url, title)
    return render(request, "dashboard.html", view, status_code=201 if created else 400)


@router.post("/dashboard/links/{link_id}/delete")
async def delete_link(
    request: Request,
    link_id: str,
    session: BrowserSession = Depends(get_browser_session),
) -> Response:
    """Delete a link from the list once the backend confirms."""
    target = guard(session.context.state, Access.AUTHENTICATED)
    if target:
        return redirect(target)

    view = session.dashboard
    await view.ensure_loaded()
    deleted = await view.delete(link_id)
    return render(request, "dashboard.html", view, status_code=200 if deleted else 400)
