"""User-facing notification sink."""

from typing import List, Protocol, Tuple

import streamlit as st


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class StreamlitNotifier:
    """Shows notifications as Streamlit toasts."""

    def success(self, message: str) -> None:
        st.toast(message, icon="✅")

    def error(self, message: str) -> None:
        st.toast(message, icon="⚠️")


class RecordingNotifier:
    """Collects notifications in memory (scripts and tests)."""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    @property
    def errors(self) -> List[str]:
        return [m for kind, m in self.messages if kind == "error"]

    @property
    def successes(self) -> List[str]:
        return [m for kind, m in self.messages if kind == "success"]
