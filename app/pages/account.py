"""Server-rendered account pages: signup, existing participant, password links.

Plain HTML forms posting back to the same path. Every interpolated value is
escaped; the CSP allows inline styles and same-origin form posts only.
"""

from html import escape

_STYLE = """
        * { box-sizing: border-box; }
        body {
            font-family: system-ui, -apple-system, 'Segoe UI', sans-serif;
            margin: 0;
            min-height: 100vh;
            background: #faf7f5;
            color: #2b2b2b;
            padding: 2rem 1rem;
        }
        .wrap { max-width: 480px; margin: 0 auto; }
        h1 { font-size: 1.6rem; font-weight: 600; margin: 0 0 1.25rem 0; }
        .card {
            background: #fff;
            border: 1px solid #eadfd8;
            padding: 1.5rem 1.75rem;
            margin-bottom: 1.25rem;
        }
        .card p { line-height: 1.55; margin: 0 0 0.75rem 0; }
        label { display: block; font-size: 0.875rem; font-weight: 500; margin: 0.9rem 0 0.3rem 0; }
        input {
            width: 100%;
            padding: 0.55rem 0.7rem;
            border: 1px solid #d8ccc4;
            font-size: 0.9375rem;
        }
        button {
            margin-top: 1.25rem;
            padding: 0.65rem 1.25rem;
            background: #b0456a;
            color: #fff;
            border: 0;
            font-size: 0.9375rem;
            cursor: pointer;
        }
        .error { background: #fdecef; border-left: 3px solid #b0456a; padding: 0.6rem 0.8rem; }
        .notice { background: #eef6ee; border-left: 3px solid #4a8a4a; padding: 0.6rem 0.8rem; }
        .links { margin-top: 1rem; font-size: 0.875rem; }
        .links a { color: #b0456a; margin-right: 1rem; }
"""

GENERIC_EXISTING_MESSAGE = (
    "Thanks. If an account is registered to that email and still needs a password, "
    "we just sent a link to create it (valid for one hour). Otherwise, log in or "
    "sign up from the portal."
)
INVALID_LINK_MESSAGE = "This link is invalid or has expired."


def render_layout(title: str, body: str) -> str:
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>{_STYLE}</style>
</head>
<body>
    <div class="wrap">
        <h1>{escape(title)}</h1>
        {body}
    </div>
</body>
</html>
""".strip()


def _banner(error: str | None = None, notice: str | None = None) -> str:
    if error:
        return f'<p class="error" role="alert">{escape(error)}</p>'
    if notice:
        return f'<p class="notice">{escape(notice)}</p>'
    return ""


def _input(name: str, label: str, value: str | None = None, kind: str = "text", required: bool = False) -> str:
    value_attr = f' value="{escape(value)}"' if value and kind != "password" else ""
    req = " required" if required else ""
    return (
        f'<label for="{name}">{escape(label)}</label>'
        f'<input id="{name}" name="{name}" type="{kind}"{value_attr}{req}>'
    )


def _token_field(token: str) -> str:
    return f'<input type="hidden" name="token" value="{escape(token)}">'


def render_start_page(
    login_path: str,
    values: dict[str, str | None] | None = None,
    error: str | None = None,
) -> str:
    """Signup form for new participants. values refill the form after an error."""
    v = values or {}
    fields = "".join(
        [
            _input("first_name", "First name", v.get("first_name"), required=True),
            _input("last_name", "Last name", v.get("last_name"), required=True),
            _input("email", "Email", v.get("email"), kind="email", required=True),
            _input("password", "Password (at least 8 characters)", kind="password", required=True),
            _input("phone", "Phone", v.get("phone"), kind="tel"),
            _input("date_of_birth", "Date of birth", v.get("date_of_birth"), kind="date"),
            _input("city", "City", v.get("city")),
            _input("state", "State", v.get("state")),
            _input("zip_code", "Zip code", v.get("zip_code")),
            _input("school_or_employer", "School or employer", v.get("school_or_employer")),
            _input("field_of_interest", "Field of interest", v.get("field_of_interest")),
        ]
    )
    body = f"""
        <section class="card">
            {_banner(error)}
            <form method="post" action="/account/start">
                {fields}
                <button type="submit">Create account</button>
            </form>
            <p class="links">
                <a href="/account/existing">Already registered with us?</a>
                <a href="{escape(login_path)}">Log in</a>
            </p>
        </section>"""
    return render_layout("Join the portal", body)


def render_existing_page(
    message: str | None = None, error: str | None = None, email: str | None = None
) -> str:
    """Existing participant recovery: enter the email on file."""
    body = f"""
        <section class="card">
            {_banner(error, message)}
            <p>Were you registered by our staff or at an event? Enter the email we have on
            file and we will help you set up your portal password.</p>
            <form method="post" action="/account/existing">
                {_input("email", "Email", email, kind="email", required=True)}
                <button type="submit">Continue</button>
            </form>
            <p class="links"><a href="/account/start">New here? Sign up</a></p>
        </section>"""
    return render_layout("Existing participant", body)


def render_create_password_page(token: str, error: str | None = None) -> str:
    """First-password form for a creation link."""
    body = f"""
        <section class="card">
            {_banner(error)}
            <form method="post" action="/account/create-password">
                {_token_field(token)}
                {_input("password", "Password (at least 8 characters)", kind="password", required=True)}
                {_input("confirm_password", "Confirm password", kind="password", required=True)}
                <button type="submit">Create password</button>
            </form>
        </section>"""
    return render_layout("Create your password", body)


def render_forgot_password_page(
    message: str | None = None, error: str | None = None
) -> str:
    """Request a reset link."""
    body = f"""
        <section class="card">
            {_banner(error, message)}
            <form method="post" action="/account/forgot-password">
                {_input("email", "Email", kind="email", required=True)}
                <button type="submit">Send reset link</button>
            </form>
        </section>"""
    return render_layout("Forgot your password?", body)


def render_reset_password_page(token: str, error: str | None = None) -> str:
    """New-password form for a reset link."""
    body = f"""
        <section class="card">
            {_banner(error)}
            <form method="post" action="/account/reset-password">
                {_token_field(token)}
                {_input("password", "New password (at least 8 characters)", kind="password", required=True)}
                <button type="submit">Reset password</button>
            </form>
        </section>"""
    return render_layout("Choose a new password", body)


def render_message_page(title: str, message: str, link_href: str, link_text: str) -> str:
    """Single message with one link onward (invalid link, reset done)."""
    body = f"""
        <section class="card">
            <p>{escape(message)}</p>
            <p class="links"><a href="{escape(link_href)}">{escape(link_text)}</a></p>
        </section>"""
    return render_layout(title, body)
