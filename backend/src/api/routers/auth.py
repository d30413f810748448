"""Sign-up, sign-in and sign-out pages."""
from fastapi import APIRouter, Depends, Form, Request, Response

from api.dependencies import get_browser_session
from api.guards import Access, guard
from api.templating import redirect, render
from core.sessions import BrowserSession
from views.notices import Notice

router = APIRouter(tags=["auth"])


@router.get("/signup")
async def signup_page(
    request: Request,
    session: BrowserSession = Depends(get_browser_session),
) -> Response:
    """Create-account form; signed-in users go to the dashboard."""
    target = guard(session.context.state, Access.ANONYMOUS)
    if target:
        return redirect(target)
    return render(request, "signup.html", session.signup)


@router.post("/signup")
async def signup_submit(
    request: Request,
    full_name: str = Form(default=""),
    email: str = Form(default=""),
    password: str = Form(default=""),
    session: BrowserSession = Depends(get_browser_session),
) -> Response:
    """
    Create an account.

    Redirects to the dashboard once the backend reports a session. Otherwise the
    form is shown again with the backend's message, or with a request to confirm
    the email address when the account needs confirmation.
    """
    target = guard(session.context.state, Access.ANONYMOUS)
    if target:
        return redirect(target)

    view = session.signup
    accepted = await view.submit(email, password, full_name)
    if view.redirect_to:
        return redirect(view.redirect_to)
    return render(request, "signup.html", view, status_code=200 if accepted else 400)


@router.get("/login")
async def login_page(
    request: Request,
    session: BrowserSession = Depends(get_browser_session),
) -> Response:
    """Sign-in form; signed-in users go to the dashboard."""
    target = guard(session.context.state, Access.ANONYMOUS)
    if target:
        return redirect(target)
    return render(request, "login.html", session.signin)


@router.post("/login")
async def login_submit(
    request: Request,
    email: str = Form(default=""),
    password: str = Form(default=""),
    session: BrowserSession = Depends(get_browser_session),
) -> Response:
    """Sign in and go to the dashboard, or show the form again with the error."""
    target = guard(session.context.state, Access.ANONYMOUS)
    if target:
        return redirect(target)

    view = session.signin
    await view.submit(email, password)
    if view.redirect_to:
        return redirect(view.redirect_to)
    return render(request, "login.html", view, status_code=400)


@router.post("/logout")
async def logout(
    session: BrowserSession = Depends(get_browser_session),
) -> Response:
    """Sign out and go to the login page."""
    result = await session.context.sign_out()
    if not result.ok:
        session.signin.notice = Notice.error(result.error or "")
    return redirect("/login")
