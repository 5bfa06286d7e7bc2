"""ExoAI — Streamlit app for classifying exoplanet candidates from transit photometry."""

import dataclasses
import html
import logging
from pathlib import Path

import anthropic
import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from exoai import config  # noqa: E402
from exoai.batch import render_csv, results_filename, run_batch, summarize_batch  # noqa: E402
from exoai.classifier import analyze_record  # noqa: E402
from exoai.errors import ClassificationError, FileParseError, NoDataError  # noqa: E402
from exoai.i18n import t  # noqa: E402
from exoai.insights import (  # noqa: E402
    issues_as_text,
    suggest_similar_exoplanets,
    summarize_validation_suggestions,
)
from exoai.loader import load_records, load_single_record  # noqa: E402
from exoai.models import AnalysisResult, BatchProgress  # noqa: E402
from exoai.renderers.plotly_3d import render_light_curve, render_scene  # noqa: E402
from exoai.renderers.static import render_light_curve_png  # noqa: E402
from exoai.samples import SAMPLE_CONFIRMED, SAMPLE_FALSE_POSITIVE  # noqa: E402
from exoai.scene import build_scene  # noqa: E402
from exoai.transform import display_name, first_number  # noqa: E402

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("exoai.app")

# Current archive column first, legacy KOI column second
_RADIUS_KEYS = ("pl_rade", "koi_prad")
_PERIOD_KEYS = ("pl_orbper", "koi_period")
_TEFF_KEYS = ("st_teff", "koi_steff")
_TEQ_KEYS = ("pl_eqt", "koi_teq")

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun it triggers fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "es" if _browser_lang.lower().startswith("es") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="🪐",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---
_DEFAULTS: dict[str, object] = {
    "record": None,  # The one selected record for single-row analysis
    "records": [],  # All rows of a batch upload
    "source_label": None,
    "upload_id": None,
    "status": "initial",
    "result": None,
    "modal_open": False,
    "batch_csv": None,
    "batch_filename": None,
}
for _key, _value in _DEFAULTS.items():
    if _key not in st.session_state:
        st.session_state[_key] = _value

# --- Dark theme CSS ---
st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #050a1a !important;
        color: #e8e8e8;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    [data-testid="stMainBlockContainer"] {
        padding-top: 1.5rem !important;
    }
    /* Glass card panels */
    .glass-card {
        background: rgba(255, 255, 255, 0.04);
        border: 1px solid rgba(255, 255, 255, 0.08);
        border-radius: 12px;
        padding: 1rem 1.2rem;
        color: #b8c0d0;
        font-size: 0.9rem;
    }
    [data-testid="stButton"] button, [data-testid="stDownloadButton"] button {
        background-color: rgba(0, 255, 136, 0.12) !important;
        color: #00ff88 !important;
        border: 1px solid #00ff88 !important;
        border-radius: 6px !important;
        font-weight: 600;
    }
    [data-testid="stButton"] button:disabled {
        opacity: 0.4;
    }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    .exo-title { font-size: 1.8rem; font-weight: 700; color: #ffffff; margin: 0; }
    .exo-tagline { color: #8899aa; font-size: 0.9rem; margin-top: 0; }
    .exo-footer { color: #556677; font-size: 0.75rem; text-align: center; margin-top: 2rem; }
    </style>
    """,
    unsafe_allow_html=True,
)


def _select(record: dict | None, label: str | None) -> None:
    """Make `record` the active one and reset any previous analysis."""
    st.session_state.record = record
    st.session_state.source_label = label
    st.session_state.status = "initial"
    st.session_state.result = None
    st.session_state.modal_open = False


def _handle_upload(upload, mode: str) -> None:
    suffix = Path(upload.name).suffix.lower()
    data = upload.getvalue()
    try:
        if mode == "single":
            record = load_single_record(data, suffix)
            st.session_state.records = []
            _select(record, upload.name)
            st.toast(t("file_loaded", _lang), icon="✅")
        else:
            records = load_records(data, suffix)
            st.session_state.records = records
            st.session_state.batch_csv = None
            _select(records[0], upload.name)
            st.toast(t("rows_loaded", _lang).format(n=len(records)), icon="✅")
    except FileParseError as e:
        log.warning("Upload %s rejected: %s", upload.name, e)
        st.session_state.records = []
        _select(None, None)
        st.toast(t("error_file", _lang).format(error=html.escape(str(e))), icon="⚠️")


def _with_insights(result: AnalysisResult) -> AnalysisResult:
    """Attach the AI comparison or validation summary. Failures fall back to a notice."""
    record = result.record
    try:
        if result.status == "confirmed":
            similar = suggest_similar_exoplanets(
                planet_name=result.planet_name,
                planet_radius=first_number(record, _RADIUS_KEYS),
                orbital_period=first_number(record, _PERIOD_KEYS),
                stellar_temperature=first_number(record, _TEFF_KEYS),
            )
            return dataclasses.replace(
                result,
                similar_to=", ".join(similar.names) or None,
                suggestions_summary=similar.reasoning or None,
            )
        if result.issues:
            summary = summarize_validation_suggestions(issues_as_text(result.issues))
            return dataclasses.replace(result, suggestions_summary=summary)
    except (anthropic.AnthropicError, KeyError) as e:
        log.warning("Insights unavailable: %s", e)
    return result


def _analyze() -> None:
    st.session_state.status = "analyzing"
    st.session_state.modal_open = False
    try:
        with st.spinner(t("analyzing", _lang)):
            result = analyze_record(st.session_state.record)
            result = _with_insights(result)
    except NoDataError:
        st.session_state.status = "initial"
        st.toast(t("error_no_data", _lang), icon="⚠️")
        return
    except ClassificationError as e:
        log.error("Prediction API call failed: %s", e)
        st.session_state.status = "initial"
        st.toast(t("error_api", _lang).format(error=html.escape(str(e))), icon="⚠️")
        return

    verdict = result.response.classification_result
    st.session_state.result = result
    st.session_state.status = result.status
    st.session_state.modal_open = True
    st.toast(
        t("analysis_done", _lang).format(
            classification=verdict.classification,
            confidence_level=verdict.confidence_level,
            accuracy=result.confidence,
        ),
        icon="🪐",
    )


def _analyze_batch() -> None:
    records = st.session_state.records
    bar = st.progress(0.0, text=t("batch_progress", _lang).format(done=0, total=len(records)))

    def on_progress(progress: BatchProgress) -> None:
        bar.progress(
            progress.completed / progress.total,
            text=t("batch_progress", _lang).format(done=progress.completed, total=progress.total),
        )

    try:
        results = run_batch(records, on_progress=on_progress)
    except NoDataError:
        bar.empty()
        st.toast(t("error_no_data", _lang), icon="⚠️")
        return

    st.session_state.batch_csv = render_csv(results)
    st.session_state.batch_filename = results_filename()
    st.toast(t("batch_done", _lang).format(**summarize_batch(results)), icon="📄")


def _results_dialog(result: AnalysisResult) -> None:
    confirmed = result.status == "confirmed"
    verdict = result.response.classification_result
    record = result.record
    st.caption(t("dialog_candidate", _lang).format(name=html.escape(result.planet_name)))

    st.markdown(f"**{t('confidence', _lang)}**")
    st.progress(min(max(result.confidence / 100, 0.0), 1.0), text=f"{result.confidence:.0f}%")
    st.caption(
        t("probabilities", _lang).format(
            p=verdict.exoplanet_probability_percentage,
            q=verdict.non_exoplanet_probability_percentage,
        )
        + " · "
        + t("model_accuracy", _lang).format(a=result.response.model_accuracy_percentage)
    )

    if confirmed:
        radius = first_number(record, _RADIUS_KEYS)
        period = first_number(record, _PERIOD_KEYS)
        teff = first_number(record, _TEFF_KEYS)
        teq = first_number(record, _TEQ_KEYS)
        habitable = 273 < teq < 373
        st.markdown(f"**{t('key_params', _lang)}**")
        c1, c2 = st.columns(2)
        c1.markdown(f"📏 {t('radius', _lang)}: {radius:.2f} R⊕")
        c1.markdown(f"🌡️ {t('stellar_temp', _lang)}: {teff:.0f} K")
        c2.markdown(f"🪐 {t('period', _lang)}: {period:.2f} {t('days', _lang)}")
        c2.markdown(f"👁️ {t('habitable_zone', _lang)}: {t('yes' if habitable else 'no', _lang)}")
        st.markdown(f"**{t('ai_comparison', _lang)}**")
        st.markdown(f"{t('similar_to', _lang)}: `{result.similar_to or '—'}`")
        if result.suggestions_summary:
            st.caption(result.suggestions_summary)
    else:
        st.markdown(f"**{t('issues_found', _lang)}**")
        if result.issues:
            for issue in result.issues:
                st.markdown(f"- **{issue.title}**: `{issue.value}`  \n  {issue.recommendation}")
        else:
            st.caption(t("no_issues", _lang))
        st.markdown(f"**{t('validation_suggestions', _lang)}**")
        st.caption(result.suggestions_summary or t("insights_fallback", _lang))

    close_key = "btn_close_confirmed" if confirmed else "btn_close_false_positive"
    if st.button(t(close_key, _lang), key="dialog_close", use_container_width=True):
        st.session_state.modal_open = False
        st.rerun()


# --- Header ---
st.markdown(
    f"<p class='exo-title'>🪐 {t('page_title', _lang)}</p>"
    f"<p class='exo-tagline'>{t('tagline', _lang)}</p>",
    unsafe_allow_html=True,
)

left, right = st.columns([2, 3])

# --- Input panel ---
with left:
    mode = st.radio(
        t("label_mode", _lang),
        options=["single", "batch"],
        format_func=lambda m: t(f"mode_{m}", _lang),
        horizontal=True,
        key="mode",
    )
    upload = st.file_uploader(t("label_upload", _lang), type=["xlsx", "xls", "csv"])
    if upload is not None:
        upload_id = (upload.name, upload.size, mode)
        if upload_id != st.session_state.upload_id:
            st.session_state.upload_id = upload_id
            _handle_upload(upload, mode)

    s1, s2 = st.columns(2)
    with s1:
        if st.button(t("btn_sample_real", _lang), use_container_width=True):
            _select(dict(SAMPLE_CONFIRMED), "Kepler-227 b")
            st.toast(t("sample_real_loaded", _lang))
    with s2:
        if st.button(t("btn_sample_fake", _lang), use_container_width=True):
            _select(dict(SAMPLE_FALSE_POSITIVE), display_name(SAMPLE_FALSE_POSITIVE))
            st.toast(t("sample_fake_loaded", _lang))

    records = st.session_state.records
    if mode == "batch" and records:
        st.selectbox(
            t("label_row", _lang),
            options=range(len(records)),
            format_func=lambda i: f"{i + 1}. {display_name(records[i], fallback=f'Row {i + 1}')}",
            key="row_pick",
            on_change=lambda: _select(
                records[st.session_state.row_pick],
                display_name(records[st.session_state.row_pick]),
            ),
        )

    st.markdown(
        f"<div class='glass-card'><b>{t('expected_params', _lang)}</b><br>{t('param_list', _lang)}</div>",
        unsafe_allow_html=True,
    )
    st.markdown("<div style='height:0.8rem'></div>", unsafe_allow_html=True)

    analyzing = st.session_state.status == "analyzing"
    if st.button(
        t("btn_analyze", _lang),
        key="analyze_btn",
        type="primary",
        use_container_width=True,
        disabled=st.session_state.record is None or analyzing,
    ):
        _analyze()
        st.rerun()

    if st.session_state.result is not None and not st.session_state.modal_open:
        if st.button(t("btn_show_result", _lang), key="show_result", use_container_width=True):
            st.session_state.modal_open = True
            st.rerun()

    if mode == "batch":
        if st.button(
            t("btn_analyze_batch", _lang),
            key="batch_btn",
            use_container_width=True,
            disabled=analyzing,
        ):
            _analyze_batch()
        if st.session_state.batch_csv is not None:
            st.download_button(
                t("btn_download", _lang),
                data=st.session_state.batch_csv,
                file_name=st.session_state.batch_filename,
                mime="text/csv",
                use_container_width=True,
            )

# --- Scene area ---
with right:
    if st.session_state.record is not None:
        scene = build_scene(st.session_state.record, st.session_state.status)
        st.plotly_chart(
            render_scene(scene),
            use_container_width=True,
            config={"displayModeBar": False},
        )
        st.plotly_chart(
            render_light_curve(scene),
            use_container_width=True,
            config={"displayModeBar": False},
        )
        st.download_button(
            t("btn_download_curve", _lang),
            data=render_light_curve_png(scene),
            file_name=f"{scene.planet_name.replace(' ', '_')}_light_curve.png",
            mime="image/png",
        )
    else:
        st.markdown(
            "<div style='height:60vh; display:flex; align-items:center; justify-content:center;"
            f" color:#334466; font-size:1.2rem;'>{t('placeholder', _lang)}</div>",
            unsafe_allow_html=True,
        )

st.markdown(f"<p class='exo-footer'>{t('footer', _lang)}</p>", unsafe_allow_html=True)

# --- Results dialog ---
if st.session_state.modal_open and st.session_state.result is not None:
    _result: AnalysisResult = st.session_state.result
    _title = t("dialog_confirmed" if _result.status == "confirmed" else "dialog_false_positive", _lang)
    st.dialog(_title)(_results_dialog)(_result)
