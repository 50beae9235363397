"""Server-rendered HTML pages (landing and account flows)."""

from app.pages.account import (
    GENERIC_EXISTING_MESSAGE,
    INVALID_LINK_MESSAGE,
    render_create_password_page,
    render_existing_page,
    render_forgot_password_page,
    render_message_page,
    render_reset_password_page,
    render_start_page,
)
from app.pages.root import render_root_page

__all__ = [
    "GENERIC_EXISTING_MESSAGE",
    "INVALID_LINK_MESSAGE",
    "render_create_password_page",
    "render_existing_page",
    "render_forgot_password_page",
    "render_message_page",
    "render_reset_password_page",
    "render_root_page",
    "render_start_page",
]
