import math

from exoai.models import STELLAR_FIELDS
from exoai.samples import SAMPLE_CONFIRMED
from exoai.transform import display_name, first_number, request_body, to_stellar_payload


def test_payload_has_exactly_ten_numeric_fields():
    payload = to_stellar_payload(SAMPLE_CONFIRMED).to_dict()

    assert list(payload) == list(STELLAR_FIELDS)
    assert len(payload) == 10
    assert all(isinstance(v, float) for v in payload.values())
    assert payload["pl_orbper"] == 9.488036
    assert payload["st_rad"] == 0.927


def test_missing_fields_default_to_zero():
    payload = to_stellar_payload({}).to_dict()

    assert payload == {name: 0.0 for name in STELLAR_FIELDS}


def test_falsy_and_unparseable_values_default_to_zero():
    record = {
        "pl_orbper": None,
        "pl_trandurh": "",
        "pl_trandep": float("nan"),
        "pl_rade": "not a number",
        "pl_insol": 0,
        "pl_eqt": "812.5",
        "st_tmag": float("inf"),
    }

    payload = to_stellar_payload(record)

    assert payload.pl_orbper == 0.0
    assert payload.pl_trandurh == 0.0
    assert payload.pl_trandep == 0.0
    assert payload.pl_rade == 0.0
    assert payload.pl_insol == 0.0
    assert payload.pl_eqt == 812.5
    assert payload.st_tmag == 0.0
    assert not any(math.isnan(v) for v in payload.to_dict().values())


def test_unrelated_columns_are_ignored():
    payload = to_stellar_payload({"koi_period": 3.2, "kepid": 42, "st_teff": 5000})

    assert payload.pl_orbper == 0.0
    assert payload.st_teff == 5000.0


def test_request_body_wraps_payload():
    body = request_body({"pl_rade": 1.1})

    assert set(body) == {"stellar_data"}
    assert body["stellar_data"]["pl_rade"] == 1.1
    assert len(body["stellar_data"]) == 10


def test_display_name_prefers_kepler_name():
    assert display_name(SAMPLE_CONFIRMED) == "Kepler-227 b"
    assert display_name({"kepler_name": None, "kepoi_name": "K00754.01"}) == "K00754.01"
    assert display_name({"kepler_name": float("nan"), "pl_name": " TOI-700 d "}) == "TOI-700 d"
    assert display_name({}) == "Unknown"
    assert display_name({}, fallback="Row 3") == "Row 3"


def test_first_number_skips_unusable_cells():
    record = {"pl_rade": "2.3 R", "koi_prad": 2.26, "pl_eqt": "812.5", "koi_teq": 700}

    assert first_number(record, ("pl_rade", "koi_prad")) == 2.26
    assert first_number(record, ("pl_eqt", "koi_teq")) == 812.5


def test_first_number_rejects_non_finite_values():
    record = {"st_teff": float("inf"), "koi_steff": float("-inf"), "pl_eqt": float("nan")}

    assert first_number(record, ("st_teff", "koi_steff")) == 0.0
    assert first_number(record, ("pl_eqt",)) == 0.0
    assert first_number({}, ("pl_orbper", "koi_period")) == 0.0
