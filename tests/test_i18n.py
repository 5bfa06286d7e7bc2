from exoai.i18n import t


def test_spanish_and_english():
    assert t("btn_analyze", "es") == "Analizar con IA"
    assert t("btn_analyze", "en") == "Analyze with AI"


def test_unknown_language_falls_back_to_english():
    assert t("btn_analyze", "fr") == "Analyze with AI"


def test_unknown_key_returns_key():
    assert t("no_such_key", "es") == "no_such_key"


def test_format_placeholders():
    text = t("batch_done", "en").format(succeeded=4, failed=1, exoplanets=3)

    assert text == "Batch done: 4 succeeded, 1 failed, 3 exoplanets."
