"""Simple two-language (es/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "es": "ExoAI",
        "en": "ExoAI",
    },
    "tagline": {
        "es": "Descubre si tu candidato es un exoplaneta real",
        "en": "Find out whether your candidate is a real exoplanet",
    },
    "label_mode": {
        "es": "Modo",
        "en": "Mode",
    },
    "mode_single": {
        "es": "Un candidato",
        "en": "Single candidate",
    },
    "mode_batch": {
        "es": "Lote",
        "en": "Batch",
    },
    "label_upload": {
        "es": "Arrastra tu archivo Excel o CSV aquí",
        "en": "Drop your Excel or CSV file here",
    },
    "btn_sample_real": {
        "es": "Usar datos de ejemplo (Real)",
        "en": "Use sample data (Real)",
    },
    "btn_sample_fake": {
        "es": "Usar datos de ejemplo (Falso)",
        "en": "Use sample data (False)",
    },
    "sample_real_loaded": {
        "es": "Listo para analizar Kepler-227 b.",
        "en": "Ready to analyze Kepler-227 b.",
    },
    "sample_fake_loaded": {
        "es": "Listo para analizar un candidato a falso positivo.",
        "en": "Ready to analyze a false-positive candidate.",
    },
    "file_loaded": {
        "es": "Archivo cargado y procesado.",
        "en": "File loaded and processed.",
    },
    "rows_loaded": {
        "es": "{n} filas cargadas.",
        "en": "{n} rows loaded.",
    },
    "label_row": {
        "es": "Fila a analizar",
        "en": "Row to analyze",
    },
    "expected_params": {
        "es": "Parámetros esperados",
        "en": "Expected parameters",
    },
    "param_list": {
        "es": "Radio del planeta (koi_prad) · Período orbital (koi_period) · Temperatura estelar (koi_steff) · Profundidad del tránsito (koi_depth) · SNR (koi_model_snr)",
        "en": "Planet radius (koi_prad) · Orbital period (koi_period) · Stellar temperature (koi_steff) · Transit depth (koi_depth) · SNR (koi_model_snr)",
    },
    "btn_analyze": {
        "es": "Analizar con IA",
        "en": "Analyze with AI",
    },
    "btn_analyze_batch": {
        "es": "Analizar lote",
        "en": "Analyze batch",
    },
    "btn_download": {
        "es": "Descargar resultados (CSV)",
        "en": "Download results (CSV)",
    },
    "btn_download_curve": {
        "es": "Descargar curva de luz (PNG)",
        "en": "Download light curve (PNG)",
    },
    "btn_show_result": {
        "es": "Ver resultado",
        "en": "Show result",
    },
    "analyzing": {
        "es": "Analizando...",
        "en": "Analyzing...",
    },
    "batch_progress": {
        "es": "Procesando {done}/{total} filas",
        "en": "Processing {done}/{total} rows",
    },
    "batch_done": {
        "es": "Lote completado: {succeeded} correctas, {failed} con error, {exoplanets} exoplanetas.",
        "en": "Batch done: {succeeded} succeeded, {failed} failed, {exoplanets} exoplanets.",
    },
    "analysis_done": {
        "es": "Resultado: {classification} - {confidence_level} ({accuracy:.2f}% de precisión)",
        "en": "Result: {classification} - {confidence_level} ({accuracy:.2f}% accuracy)",
    },
    "error_file": {
        "es": "Error de archivo: {error}",
        "en": "File error: {error}",
    },
    "error_api": {
        "es": "Error de API: {error}",
        "en": "API error: {error}",
    },
    "error_no_data": {
        "es": "No hay datos para analizar. Por favor, carga un archivo.",
        "en": "No data to analyze. Please load a file.",
    },
    "placeholder": {
        "es": "Carga un candidato para ver su sistema estelar",
        "en": "Load a candidate to see its star system",
    },
    "dialog_confirmed": {
        "es": "¡Exoplaneta Confirmado!",
        "en": "Exoplanet Confirmed!",
    },
    "dialog_false_positive": {
        "es": "Falso Positivo Detectado",
        "en": "False Positive Detected",
    },
    "dialog_candidate": {
        "es": "Análisis para el candidato: {name}",
        "en": "Analysis for candidate: {name}",
    },
    "confidence": {
        "es": "Nivel de confianza",
        "en": "Confidence level",
    },
    "key_params": {
        "es": "Parámetros clave",
        "en": "Key parameters",
    },
    "radius": {
        "es": "Radio",
        "en": "Radius",
    },
    "period": {
        "es": "Período",
        "en": "Period",
    },
    "days": {
        "es": "días",
        "en": "days",
    },
    "stellar_temp": {
        "es": "Temp. estelar",
        "en": "Stellar temp.",
    },
    "habitable_zone": {
        "es": "Zona habitable",
        "en": "Habitable zone",
    },
    "yes": {
        "es": "Sí",
        "en": "Yes",
    },
    "no": {
        "es": "No",
        "en": "No",
    },
    "ai_comparison": {
        "es": "Comparación IA",
        "en": "AI comparison",
    },
    "similar_to": {
        "es": "Similar a",
        "en": "Similar to",
    },
    "issues_found": {
        "es": "Problemas encontrados",
        "en": "Issues found",
    },
    "no_issues": {
        "es": "El archivo no incluye indicadores de falso positivo.",
        "en": "The file has no false-positive indicators.",
    },
    "validation_suggestions": {
        "es": "Sugerencias para validación",
        "en": "Validation suggestions",
    },
    "insights_fallback": {
        "es": "Sugerencias no disponibles en este momento.",
        "en": "Suggestions are unavailable right now.",
    },
    "btn_close_confirmed": {
        "es": "Ver detalles completos",
        "en": "See full details",
    },
    "btn_close_false_positive": {
        "es": "Intentar de nuevo",
        "en": "Try again",
    },
    "probabilities": {
        "es": "Exoplaneta {p:.2f}% · No exoplaneta {q:.2f}%",
        "en": "Exoplanet {p:.2f}% · Not exoplanet {q:.2f}%",
    },
    "model_accuracy": {
        "es": "Precisión del modelo: {a:.1f}%",
        "en": "Model accuracy: {a:.1f}%",
    },
    "footer": {
        "es": "Datos de las misiones Kepler y TESS de la NASA.",
        "en": "Data from NASA's Kepler and TESS missions.",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
