"""Built-in sample candidates (Kepler KOI rows with the payload columns filled in)."""

from exoai.models import CandidateRecord

SAMPLE_CONFIRMED: CandidateRecord = {
    "kepid": 10797460,
    "kepoi_name": "K00752.01",
    "kepler_name": "Kepler-227 b",
    "koi_disposition": "CONFIRMED",
    "koi_pdisposition": "CANDIDATE",
    "koi_score": 1.0,
    "koi_fpflag_nt": 0,
    "koi_fpflag_ss": 0,
    "koi_fpflag_co": 0,
    "koi_fpflag_ec": 0,
    "koi_period": 9.488036,
    "koi_prad": 2.26,
    "koi_teq": 793,
    "koi_steff": 5455,
    "koi_depth": 615.8,
    "koi_model_snr": 35.8,
    "ra": 291.93423,
    "dec": 48.141651,
    "pl_orbper": 9.488036,
    "pl_trandurh": 2.9575,
    "pl_trandep": 615.8,
    "pl_rade": 2.26,
    "pl_insol": 93.59,
    "pl_eqt": 793,
    "st_tmag": 15.347,
    "st_teff": 5455,
    "st_logg": 4.467,
    "st_rad": 0.927,
}

SAMPLE_FALSE_POSITIVE: CandidateRecord = {
    "kepid": 10848459,
    "kepoi_name": "K00754.01",
    "kepler_name": None,
    "koi_disposition": "FALSE POSITIVE",
    "koi_pdisposition": "FALSE POSITIVE",
    "koi_score": 0.0,
    "koi_fpflag_nt": 0,
    "koi_fpflag_ss": 1,
    "koi_fpflag_co": 0,
    "koi_fpflag_ec": 0,
    "koi_period": 1.736952,
    "koi_prad": 33.46,
    "koi_teq": 1395,
    "koi_steff": 5805,
    "koi_depth": 8079.2,
    "koi_model_snr": 505.6,
    "ra": 297.00482,
    "dec": 48.134129,
    "pl_orbper": 1.736952,
    "pl_trandurh": 2.40641,
    "pl_trandep": 8079.2,
    "pl_rade": 33.46,
    "pl_insol": 891.96,
    "pl_eqt": 1395,
    "st_tmag": 15.597,
    "st_teff": 5805,
    "st_logg": 4.564,
    "st_rad": 0.791,
}

SAMPLES: tuple[CandidateRecord, ...] = (SAMPLE_CONFIRMED, SAMPLE_FALSE_POSITIVE)
