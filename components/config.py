# components/config.py
"""
Process-wide settings, read once from Streamlit secrets with an environment
variable fallback. Secrets stay on the server; nothing here is sent to the
browser.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

import streamlit as st

from components.gemini_handler import DEFAULT_MODEL

logger = logging.getLogger(__name__)

DEFAULT_ADVISOR_URL = "https://blr-bimon.nl/diensten/gebouwautomatisering.html"
DEFAULT_ADVISOR_PHONE = "+31348472247"


@dataclass(frozen=True)
class AppConfig:
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODEL
    lead_webhook_url: Optional[str] = None
    lead_webhook_timeout: float = 10.0
    advisor_url: str = DEFAULT_ADVISOR_URL
    advisor_phone: str = DEFAULT_ADVISOR_PHONE

    @property
    def report_enabled(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def lead_webhook_enabled(self) -> bool:
        return bool(self.lead_webhook_url) and self.lead_webhook_url.startswith("https://")

    def missing_settings(self) -> List[str]:
        missing = []
        if not self.report_enabled:
            missing.append("GEMINI_API_KEY")
        if not self.lead_webhook_enabled:
            missing.append("GOOGLE_APP_SCRIPT_URL")
        return missing


def _lookup(key: str, secrets: Mapping[str, Any], environ: Mapping[str, str]) -> Optional[str]:
    for source in (secrets, environ):
        value = source.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def load_config(secrets: Optional[Mapping[str, Any]] = None,
                environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    secrets = secrets or {}
    environ = os.environ if environ is None else environ

    timeout = _lookup("LEAD_WEBHOOK_TIMEOUT", secrets, environ)
    try:
        timeout_s = float(timeout) if timeout else 10.0
    except ValueError:
        logger.warning(f"Ignoring invalid LEAD_WEBHOOK_TIMEOUT {timeout!r}")
        timeout_s = 10.0

    return AppConfig(
        gemini_api_key=_lookup("GEMINI_API_KEY", secrets, environ) or _lookup("API_KEY", secrets, environ),
        gemini_model=_lookup("GEMINI_MODEL", secrets, environ) or DEFAULT_MODEL,
        lead_webhook_url=_lookup("GOOGLE_APP_SCRIPT_URL", secrets, environ),
        lead_webhook_timeout=timeout_s,
        advisor_url=_lookup("ADVISOR_URL", secrets, environ) or DEFAULT_ADVISOR_URL,
        advisor_phone=_lookup("ADVISOR_PHONE", secrets, environ) or DEFAULT_ADVISOR_PHONE,
    )


def _read_streamlit_secrets() -> Mapping[str, Any]:
    try:
        return st.secrets.to_dict()
    except Exception as e:
        # No secrets.toml is a normal local setup; env vars still apply.
        logger.info(f"Streamlit secrets unavailable, using environment only: {e}")
        return {}


@st.cache_resource
def get_config() -> AppConfig:
    config = load_config(_read_streamlit_secrets())
    missing = config.missing_settings()
    if missing:
        logger.warning("Missing configuration: %s", ", ".join(missing))
    return config
