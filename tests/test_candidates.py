"""
Pure unit tests for app/detection/candidates.py: build_candidates().
"""

from app.detection.candidates import build_candidates

BASES = ["https://api.test/v1beta", "https://api.test/v1"]
MODELS = ["gemini-1.5-flash", "gemini-1.5-flash-latest", "gemini-1.5-pro", "gemini-1.5-pro-latest"]


def _url(base: str, model: str) -> str:
    return f"{base}/models/{model}:generateContent"


def test_base_major_model_minor_with_latest_variants():
    result = build_candidates(["m1", "m2"], ["v1", "v2"])

    assert result == [
        _url("v1", "m1"), _url("v1", "m1-latest"),
        _url("v1", "m2"), _url("v1", "m2-latest"),
        _url("v2", "m1"), _url("v2", "m1-latest"),
        _url("v2", "m2"), _url("v2", "m2-latest"),
    ]


def test_latest_model_gets_no_extra_variant():
    result = build_candidates(["m1-latest"], ["v1"])
    assert result == [_url("v1", "m1-latest")]


def test_override_is_first():
    override = "https://custom.example.com/models/x:generateContent"
    result = build_candidates(MODELS, BASES, preferred_model="gemini-1.5-flash", override=override)
    assert result[0] == override


def test_override_already_in_list_is_not_repeated():
    override = _url(BASES[0], "gemini-1.5-pro")
    result = build_candidates(MODELS, BASES, override=override)

    assert result[0] == override
    assert result.count(override) == 1


def test_preferred_model_precedes_fallbacks_in_every_base():
    result = build_candidates(["m1", "m2"], ["v1", "v2"], preferred_model="custom")

    assert result[0] == _url("v1", "custom")
    assert result[1] == _url("v1", "custom-latest")
    v2_start = result.index(_url("v2", "custom"))
    assert result[v2_start + 2] == _url("v2", "m1")


def test_default_deployment_list_is_deduplicated():
    # The preferred model repeats the first fallback, and explicit -latest
    # entries repeat the generated variants.
    result = build_candidates(MODELS, BASES, preferred_model="gemini-1.5-flash")

    assert len(result) == len(set(result))
    assert result == [
        _url(BASES[0], "gemini-1.5-flash"), _url(BASES[0], "gemini-1.5-flash-latest"),
        _url(BASES[0], "gemini-1.5-pro"), _url(BASES[0], "gemini-1.5-pro-latest"),
        _url(BASES[1], "gemini-1.5-flash"), _url(BASES[1], "gemini-1.5-flash-latest"),
        _url(BASES[1], "gemini-1.5-pro"), _url(BASES[1], "gemini-1.5-pro-latest"),
    ]


def test_length_bound_and_no_duplicates():
    for models in (["a"], ["a", "a-latest"], ["a", "b", "c"], ["x-latest", "y"]):
        for bases in (["v1"], ["v1", "v2"], ["v1", "v1", "v2"]):
            result = build_candidates(models, bases)
            assert len(result) <= len(bases) * len(models) * 2
            assert len(result) == len(set(result))


def test_deterministic():
    kwargs = dict(preferred_model="m0", override="https://o.test/x:generateContent")
    first = build_candidates(["m1", "m2"], BASES, **kwargs)
    for _ in range(5):
        assert build_candidates(["m1", "m2"], BASES, **kwargs) == first


def test_trailing_slash_on_base_is_ignored():
    assert build_candidates(["m1"], ["v1/"])[0] == _url("v1", "m1")


def test_empty_inputs_give_only_the_override():
    assert build_candidates([], []) == []
    assert build_candidates([], [], override="https://o.test") == ["https://o.test"]
