# components/ui_components.py
# Streamlit views for the three wizard phases: questions, contact details, report.

import logging

import streamlit as st

from components.checklist import QuestionType
from components.lead_capture import UserData, is_valid_lead
from components.pdf_exporter import PDF_FILE_NAME, ReportExportError
from components.utils import answers_to_dataframe, split_paragraphs
from components.wizard_state import WizardController

logger = logging.getLogger(__name__)

LEAD_FIELD_KEYS = ("lead_name", "lead_company", "lead_email")
PDF_STATE_KEY = "report_pdf"


# ==================== HEADER ====================

def create_app_header():
    st.title("🌡️ HVAC Compatibiliteitscheck")
    st.caption("Ontdek in zes vragen hoe goed uw HVAC-systeem aan te sluiten is op een Gebouwbeheersysteem (GBS).")


# ==================== QUESTIONNAIRE ====================

def render_questionnaire(wizard: WizardController):
    """One question at a time, with a progress bar and Terug / Volgende navigation."""
    index = wizard.current_question_index
    question = wizard.current_question
    current = wizard.current_answer.answer if wizard.current_answer else None

    st.progress(wizard.progress)
    st.markdown(f"**Vraag {index + 1} van {wizard.question_count}**")
    st.subheader(question.text)

    if question.type == QuestionType.BUTTONS:
        for opt_idx, option in enumerate(question.options):
            st.button(
                option,
                key=f"q{question.id}_opt{opt_idx}",
                type="primary" if option == current else "secondary",
                use_container_width=True,
                on_click=wizard.record_answer,
                args=(index, option),
            )
    else:
        radio_key = f"q{question.id}_radio"

        def _on_radio_change():
            choice = st.session_state.get(radio_key)
            if choice is not None:
                wizard.record_answer(index, choice)

        st.radio(
            "Kies een antwoord",
            options=list(question.options),
            index=question.options.index(current) if current else None,
            key=radio_key,
            on_change=_on_radio_change,
            label_visibility="collapsed",
        )

    st.markdown("")
    col1, _, col3 = st.columns([1, 2, 1])
    with col1:
        st.button("Terug", key="back_btn", on_click=wizard.retreat,
                  disabled=not wizard.can_retreat, use_container_width=True)
    with col3:
        st.button("Volgende", key="next_btn", type="primary", on_click=wizard.advance,
                  disabled=not wizard.can_advance, use_container_width=True)


# ==================== LEAD CAPTURE ====================

def _submit_lead(wizard: WizardController):
    user_data = UserData(
        name=st.session_state.get("lead_name", "").strip(),
        company=st.session_state.get("lead_company", "").strip(),
        email=st.session_state.get("lead_email", "").strip(),
    )
    wizard.submit_lead(user_data)


def render_lead_capture(wizard: WizardController):
    st.header("Ontvang uw HVAC Compatibiliteitsrapport")
    st.write(
        "U heeft alle vragen beantwoord. Vul hieronder uw gegevens in om uw gepersonaliseerde rapport "
        "en deskundige aanbevelingen te ontvangen."
    )

    name = st.text_input("Volledige Naam", key="lead_name", placeholder="Jan Jansen")
    company = st.text_input("Bedrijfsnaam", key="lead_company", placeholder="Uw Bedrijf B.V.")
    email = st.text_input("Zakelijk E-mailadres", key="lead_email", placeholder="jan.jansen@bedrijf.nl")

    # Invalid input never reaches the wizard: the button stays disabled.
    st.button(
        "Bekijk Mijn Resultaten",
        key="lead_submit_btn",
        type="primary",
        disabled=not is_valid_lead(name, company, email.strip()),
        on_click=_submit_lead,
        args=(wizard,),
        use_container_width=True,
    )


# ==================== COMPLETION ====================

def restart_wizard(wizard: WizardController):
    wizard.restart()
    for key in LEAD_FIELD_KEYS + (PDF_STATE_KEY,):
        st.session_state.pop(key, None)
    # Radio widgets keep their own value; drop them so a new run starts blank.
    for key in [k for k in st.session_state.keys() if str(k).endswith("_radio")]:
        del st.session_state[key]


def _prepare_pdf(wizard, exporter):
    try:
        with st.spinner("Rapport wordt voorbereid..."):
            pdf = exporter.export(wizard.report, wizard.user_data)
    except ReportExportError:
        st.error("Er is een fout opgetreden bij het maken van het PDF-rapport. Probeer het opnieuw.")
        return
    if pdf is not None:
        st.session_state[PDF_STATE_KEY] = pdf


def render_action_buttons(wizard: WizardController, exporter, config):
    st.markdown("---")

    if st.button("📄 Download rapport (PDF)", key="pdf_btn", type="primary",
                 disabled=exporter.in_flight, use_container_width=True):
        _prepare_pdf(wizard, exporter)

    if st.session_state.get(PDF_STATE_KEY):
        st.download_button(
            "💾 Opslaan als PDF",
            data=st.session_state[PDF_STATE_KEY],
            file_name=PDF_FILE_NAME,
            mime="application/pdf",
            key="pdf_download_btn",
            use_container_width=True,
        )

    col1, col2 = st.columns(2)
    with col1:
        st.link_button("Contact met Adviseur", config.advisor_url, use_container_width=True)
    with col2:
        st.link_button("Start gesprek", f"tel:{config.advisor_phone}", use_container_width=True)

    st.button("Start opnieuw", key="restart_btn", on_click=restart_wizard, args=(wizard,))


def render_completion(wizard: WizardController, exporter, config):
    name = wizard.user_data.name if wizard.user_data else ""
    st.success(f"✅ Bedankt, {name}!")
    st.write("Uw gegevens zijn ontvangen. Hieronder vindt u uw persoonlijke compatibiliteitsrapport.")

    # Actions only appear once the report is there, so they are unavailable while loading.
    if wizard.report is None:
        with st.spinner("Uw persoonlijke compatibiliteitsrapport wordt gegenereerd..."):
            wizard.load_report()

    report = wizard.report
    if report is None:
        st.error("Er is een fout opgetreden bij het genereren van uw rapport.")
        return

    st.subheader("Uw Gepersonaliseerde Stappenplan")
    st.info(report.summary)

    for idx, step in enumerate(report.steps):
        with st.expander(step.title, expanded=(idx == 0)):
            for paragraph in split_paragraphs(step.content):
                st.markdown(paragraph)

    with st.expander("📋 Uw antwoorden", expanded=False):
        st.dataframe(answers_to_dataframe(wizard.answers), hide_index=True, use_container_width=True)

    render_action_buttons(wizard, exporter, config)
