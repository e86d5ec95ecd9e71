# app.py - HVAC compatibility checklist (questionnaire -> contact details -> report)

import streamlit as st
import logging
from functools import partial

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler('hvac_checklist.log'),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# --- Component Imports ---
try:
    from components.config import get_config
    from components.gemini_handler import setup_gemini, generate_report
    from components.lead_capture import LeadNotifier
    from components.pdf_exporter import ReportExporter
    from components.wizard_state import WizardController, WizardStep
    from components.ui_components import (
        create_app_header, render_questionnaire, render_lead_capture, render_completion
    )
except ImportError as e:
    st.error(f"Failed to import a necessary component: {e}")
    logger.error(f"ImportError: {e}", exc_info=True)
    st.stop()


@st.cache_resource
def get_gemini_model(api_key, model_name):
    """One configured model per process; None when Gemini is not configured."""
    return setup_gemini(api_key, model_name)


def init_session_state(config):
    if 'wizard' not in st.session_state:
        model = get_gemini_model(config.gemini_api_key, config.gemini_model)
        notifier = LeadNotifier(config.lead_webhook_url, timeout=config.lead_webhook_timeout)
        st.session_state.wizard = WizardController(
            notify=notifier.notify,
            fetch_report=partial(generate_report, model),
        )
        logger.info("New checklist session started")
    if 'exporter' not in st.session_state:
        st.session_state.exporter = ReportExporter()


def main():
    st.set_page_config(
        page_title="HVAC Compatibiliteitscheck",
        page_icon="🌡️",
        layout="centered",
    )

    config = get_config()
    init_session_state(config)
    wizard = st.session_state.wizard

    create_app_header()

    if wizard.step == WizardStep.QUESTIONNAIRE:
        render_questionnaire(wizard)
    elif wizard.step == WizardStep.LEAD_CAPTURE:
        render_lead_capture(wizard)
    else:
        render_completion(wizard, st.session_state.exporter, config)


if __name__ == "__main__":
    main()
