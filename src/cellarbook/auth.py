"""
Login gate for Cellarbook.

streamlit-authenticator checks the app password; every app user must also
have a `[supabase_users.<username>]` entry, which `supabase_session` uses to
open the Supabase session that row-level security is evaluated against.
"""

import logging
from typing import Optional

import streamlit as st
import streamlit_authenticator as stauth

logger = logging.getLogger(__name__)

SECRETS_EXAMPLE = '''[passwords]
alice = "bcrypt-hash-of-app-password"

[cookie]
name = "cellarbook_auth"
key = "random-signing-key"
expiry_days = 30

[supabase_users.alice]
email = "alice@example.com"
password = "supabase-password"'''

# Session keys that belong to one signed-in user
USER_SESSION_KEYS = ("supabase_client", "supabase_client_username")


def _build_credentials(passwords: dict) -> dict:
    return {
        "usernames": {
            username: {"name": username.title(), "password": hashed}
            for username, hashed in passwords.items()
        }
    }


def _load_auth_secrets() -> tuple[dict, dict, dict]:
    passwords = dict(st.secrets["passwords"])
    cookie = dict(st.secrets["cookie"])
    supabase_users = dict(st.secrets.get("supabase_users", {}))
    return passwords, cookie, supabase_users


def _forget_user_session() -> None:
    """Drop the cached Supabase client so the next login opens a fresh session."""
    for key in USER_SESSION_KEYS:
        st.session_state.pop(key, None)


def setup_authentication() -> Optional[str]:
    """
    Show the login form and return the username once authenticated.

    Stops the script run while nobody is logged in, when secrets are missing,
    or when the user has no Supabase account mapped.
    """
    try:
        passwords, cookie, supabase_users = _load_auth_secrets()
    except (FileNotFoundError, KeyError):
        st.error("🔒 Authentication not configured")
        st.warning("Add credentials to `.streamlit/secrets.toml` to enable login.")
        st.code(SECRETS_EXAMPLE, language="toml")
        st.stop()

    authenticator = stauth.Authenticate(
        _build_credentials(passwords),
        cookie["name"],
        cookie["key"],
        cookie["expiry_days"],
    )

    try:
        authenticator.login()
    except Exception as e:
        logger.error(f"Login widget failed: {type(e).__name__} - {e}")
        st.error(f"Login error: {e}")
        st.stop()

    status = st.session_state.get("authentication_status")
    username = st.session_state.get("username")

    if status is not True:
        _forget_user_session()
        if status is False:
            st.error("Username/password is incorrect")
        else:
            st.warning("Please enter your username and password")
        st.stop()

    if username not in supabase_users:
        logger.warning(f"No Supabase account mapped for '{username}'")
        st.error(f"No cellar account is set up for **{username}**. Ask the owner to add one.")
        st.stop()

    with st.sidebar:
        st.write(f"Signed in as: **{st.session_state.get('name')}**")
        if authenticator.logout("Logout", "sidebar"):
            _forget_user_session()

    return username
