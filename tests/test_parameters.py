import pytest

from causalcompare.model.parameters import ParameterTypeError, Parameters
from causalcompare.model.params import PARAM_DESCRIPTIONS, Params, get_description, upper_bound_or


def test_get_returns_only_explicit_values():
    params = Parameters()
    assert params.get(Params.NUM_RUNS) is None
    assert Params.NUM_RUNS not in params

    params.set(Params.NUM_RUNS, 4)
    assert params.get(Params.NUM_RUNS) == 4
    assert Params.NUM_RUNS in params


def test_typed_getters_fall_back_to_registered_defaults():
    params = Parameters()
    assert params.get_double(Params.ALPHA) == pytest.approx(0.001)
    assert params.get_int(Params.NUM_TIME_LAGS) == 1
    assert params.get_boolean(Params.DISCRETIZE) is True
    assert params.get_int(Params.NUM_CATEGORIES_TO_DISCRETIZE) == 3
    assert params.get_double(Params.PENALTY_DISCOUNT) == pytest.approx(2.0)


def test_call_default_wins_over_registered_default():
    params = Parameters()
    assert params.get_int(Params.NUM_TIME_LAGS, 5) == 5
    params.set(Params.NUM_TIME_LAGS, 2)
    assert params.get_int(Params.NUM_TIME_LAGS, 5) == 2


def test_unknown_key_without_default_raises():
    with pytest.raises(KeyError):
        Parameters().get_int("noSuchParameter")


def test_coercions():
    params = Parameters.from_dict({
        "a": 3.0,
        "b": " 7 ",
        "c": "0.25",
        "d": "TRUE",
        "e": 2,
    })
    assert params.get_int("a") == 3
    assert params.get_int("b") == 7
    assert params.get_double("c") == pytest.approx(0.25)
    assert params.get_boolean("d") is True
    assert params.get_double("e") == pytest.approx(2.0)


@pytest.mark.parametrize("key, value, getter", [
    ("x", True, "get_int"),
    ("x", False, "get_double"),
    ("x", 2.5, "get_int"),
    ("x", "abc", "get_double"),
    ("x", 1, "get_boolean"),
])
def test_wrong_types_raise_parameter_type_error(key, value, getter):
    params = Parameters.from_dict({key: value})
    with pytest.raises(ParameterTypeError) as info:
        getattr(params, getter)(key)
    assert info.value.key == key
    assert isinstance(info.value, TypeError)


def test_copy_is_independent():
    params = Parameters.from_dict({Params.ALPHA: 0.05})
    other = params.copy()
    other.set(Params.ALPHA, 0.5)
    assert params.get_double(Params.ALPHA) == pytest.approx(0.05)
    assert other.as_dict() == {Params.ALPHA: 0.5}


def test_remove_and_iteration():
    params = Parameters.from_dict({"a": 1, "b": 2})
    params.remove("a")
    params.remove("missing")
    assert list(params) == ["b"]
    assert len(params) == 1


def test_descriptions():
    alpha = get_description(Params.ALPHA)
    assert alpha.value_type is float
    assert alpha.in_bounds(0.5)
    assert not alpha.in_bounds(1.5)
    assert upper_bound_or(PARAM_DESCRIPTIONS[Params.PENALTY_DISCOUNT], 99.0) == 99.0
    with pytest.raises(KeyError):
        get_description("noSuchParameter")


def test_sample_size_description():
    params = Parameters()
    assert params.get_int(Params.SAMPLE_SIZE) == 1000
    description = get_description(Params.SAMPLE_SIZE)
    assert description.value_type is int
    assert not description.in_bounds(0)
