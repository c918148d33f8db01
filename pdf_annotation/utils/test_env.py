import pdf_annotation.utils.i18n  # noqa:F401

from easydict import EasyDict as edict

from .env import load_cfg_from_env


def test_load_cfg_from_env():
    input_dict = {"PDF_ANNOTATION_a": 2, "PDF_ANNOTATION_eoq__trabson": 3}
    loaded = load_cfg_from_env(edict(), input_dict)
    assert loaded.a == 2
    assert loaded.eoq.trabson == 3


def test_load_cfg_from_env_ignores_other_variables():
    loaded = load_cfg_from_env(edict(id_length=10), {"HOME": "/root", "OTHER_a": 1})
    assert loaded == {"id_length": 10}


def test_load_cfg_from_env_lowercases_keys():
    loaded = load_cfg_from_env(edict(), {"PDF_ANNOTATION_UNSELECTED_ALPHA": "40"})
    assert loaded.unselected_alpha == "40"
