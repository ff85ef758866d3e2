import logging
from typing import Optional

import streamlit as st
from supabase import Client, create_client

from cellarbook.config import get_required_setting, normalize_secret_string

logger = logging.getLogger(__name__)


def _get_supabase_credentials(username: str) -> tuple[str, str]:
    """Map Streamlit username to Supabase email/password from secrets.

    Expects one table per user:

        [supabase_users.alice]
        email = "alice@example.com"
        password = "..."
    """
    users = st.secrets["supabase_users"]
    if username not in users:
        raise ValueError(f"Unknown Streamlit user '{username}' for Supabase auth")

    entry = users[username]
    return (
        normalize_secret_string(entry.get("email"), f"supabase_users.{username}.email"),
        normalize_secret_string(entry.get("password"), f"supabase_users.{username}.password"),
    )


def get_supabase_client() -> Client:
    """
    Return a Supabase client authenticated as the current Streamlit user.

    Assumes Streamlit authentication already ran and `st.session_state["username"]` exists.
    """
    username = st.session_state.get("username")
    if not username:
        raise RuntimeError("Streamlit auth must run before Supabase initialization")

    cached_client = st.session_state.get("supabase_client")
    cached_username = st.session_state.get("supabase_client_username")
    if cached_client is not None and cached_username == username:
        return cached_client

    sb = create_client(get_required_setting("SUPABASE_URL"), get_required_setting("SUPABASE_KEY"))
    email, password = _get_supabase_credentials(username)

    auth_response = sb.auth.sign_in_with_password(
        {"email": email, "password": password}
    )
    session = getattr(auth_response, "session", None)
    if not session or not session.access_token or not session.refresh_token:
        raise RuntimeError("Supabase password login did not return a valid session")

    sb.auth.set_session(session.access_token, session.refresh_token)
    logger.info(f"Supabase session established for {username}")

    st.session_state["supabase_client"] = sb
    st.session_state["supabase_client_username"] = username
    return sb


def current_user(sb: Client):
    """Return the signed-in Supabase user object, or None."""
    response = sb.auth.get_user()
    return getattr(response, "user", None)


def current_user_id(sb: Client) -> str:
    """Return the signed-in user's id; every row we write is scoped by it."""
    user = current_user(sb)
    if user is None:
        raise RuntimeError("No authenticated Supabase user")
    return user.id


def current_user_email(sb: Client) -> Optional[str]:
    user = current_user(sb)
    return getattr(user, "email", None) if user is not None else None


def sign_out(sb: Client) -> None:
    """Sign out of Supabase and drop the cached client."""
    sb.auth.sign_out()
    st.session_state.pop("supabase_client", None)
    st.session_state.pop("supabase_client_username", None)
