"""Root landing page with links to the account pages and API docs."""

from html import escape

from app.pages.account import render_layout


def render_root_page(app_name: str, login_path: str) -> str:
    """Return HTML for the root landing page."""
    body = f"""
        <section class="card">
            <p>Welcome to the participant portal. Create an account, recover an
            account our staff set up for you, or reset a forgotten password.</p>
            <p class="links">
                <a href="/account/start">Sign up</a>
                <a href="/account/existing">Existing participant</a>
                <a href="/account/forgot-password">Forgot password</a>
                <a href="{escape(login_path)}">Log in</a>
            </p>
        </section>
        <section class="card">
            <p>JSON API under <code>/api</code>. Liveness at <code>/health</code>.</p>
            <p class="links"><a href="/docs">API docs</a></p>
        </section>"""
    return render_layout(app_name, body)
