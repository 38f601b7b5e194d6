import pytest

from pity_randomizer.config import DrawOptions, RampOptions, RandomizerConfig
from pity_randomizer.errors import InvalidRangeError
from pity_randomizer.randomizer import Randomizer
from pity_randomizer.types import TrialCounters


def _randomizer(value: float, **kwargs) -> Randomizer:
    return Randomizer(random_fn=lambda: value, **kwargs)


def test_draw_uses_instance_defaults_and_per_call_overrides():
    config = RandomizerConfig(draw=DrawOptions(max=10.0))
    randomizer = Randomizer(config=config, random_fn=lambda: 0.5)

    assert randomizer.draw() == 5.0
    assert randomizer.draw(maximum=20.0) == 10.0
    assert randomizer.draw(DrawOptions(min=2.0)) == 6.0
    assert randomizer.draw(DrawOptions(min=2.0), minimum=4.0) == 7.0


def test_draw_decimal_true_uses_configured_places():
    randomizer = Randomizer(config=RandomizerConfig(decimal_places=4), random_fn=lambda: 0.5)
    assert randomizer.draw(decimal=True) == "0.5000"


def test_draw_invokes_reset_callback():
    calls = []
    randomizer = _randomizer(0.9)
    result = randomizer.draw(success_threshold=0.5, reset_above=0.8, on_reset=lambda: calls.append(1))
    assert result is True
    assert calls == [1]


@pytest.mark.parametrize(
    "options",
    [
        {},
        {"success_threshold": 0.5},
        {"success_threshold": 2.0},
        {"decimal": True},
        {"decimal": 3},
    ],
)
def test_linear_ramp_returns_max_once_maxed_out(options):
    randomizer = _randomizer(0.0)
    result = randomizer.linear_ramp(1, trials=100, maximum=1.0, **options)
    assert result == 1.0
    assert isinstance(result, float)


def test_linear_ramp_raises_floor_with_trials():
    randomizer = _randomizer(0.0)
    assert randomizer.linear_ramp(1, trials=50) == pytest.approx(0.5)
    assert randomizer.linear_ramp(2, RampOptions(trials=10, min=0.0, max=10.0)) == pytest.approx(2.0)


def test_linear_ramp_reads_counter_without_incrementing():
    randomizer = Randomizer(trials={"linear": 25}, random_fn=lambda: 0.0)
    assert randomizer.linear_ramp(2) == pytest.approx(0.5)
    assert randomizer.linear_ramp(2) == pytest.approx(0.5)
    assert randomizer.counters.linear == 25

    randomizer.counters.increment("linear", 25)
    assert randomizer.linear_ramp(2) == 1.0


@pytest.mark.parametrize("draw,expected", [(0.0, 2.0), (0.5, 3.0)])
def test_nearing_ramp_without_trials_is_unshifted(draw, expected):
    randomizer = _randomizer(draw)
    assert randomizer.nearing_ramp(3, minimum=2.0, maximum=4.0) == pytest.approx(expected)


def test_nearing_ramp_lifts_floor_with_trials():
    randomizer = Randomizer(trials={"nearing": 1}, random_fn=lambda: 0.0)
    assert randomizer.nearing_ramp(1) == pytest.approx(0.5)
    assert randomizer.counters.nearing == 1


def test_nearing_ramp_success_resets_its_counter():
    randomizer = Randomizer(trials={"linear": 2, "nearing": 3, "exponential": 4}, random_fn=lambda: 0.9)

    assert randomizer.nearing_ramp(1, success_threshold=0.5) is True
    assert randomizer.counters == TrialCounters(linear=2, nearing=0, exponential=4)


def test_exponential_ramp_counts_every_call():
    randomizer = Randomizer(trials={"linear": 2, "nearing": 3}, random_fn=lambda: 0.0)
    for _ in range(5):
        randomizer.exponential_ramp(0.1)
    assert randomizer.counters.exponential == 5

    randomizer.reset_exponential()
    assert randomizer.counters == TrialCounters(linear=2, nearing=3, exponential=0)


def test_exponential_ramp_uses_count_before_increment():
    randomizer = Randomizer(trials=2, random_fn=lambda: 0.0)
    assert randomizer.exponential_ramp(0.25, maximum=4.0) == pytest.approx(1.0)
    assert randomizer.counters.exponential == 3


def test_exponential_ramp_resets_after_success():
    randomizer = _randomizer(0.0)

    assert randomizer.exponential_ramp(1, success_threshold=0.5) is False
    assert randomizer.counters.exponential == 1

    assert randomizer.exponential_ramp(1, success_threshold=0.5) is True
    assert randomizer.counters.exponential == 0


def test_ramp_decimal_mode_is_forwarded():
    randomizer = _randomizer(0.5)
    assert randomizer.nearing_ramp(1, decimal=True) == "0.50"
    assert randomizer.exponential_ramp(1, decimal=1) == "0.5"


def test_ramp_rejects_unknown_options():
    with pytest.raises(TypeError):
        _randomizer(0.0).linear_ramp(1, tries=3)


def test_ramp_uses_configured_rapidity():
    randomizer = Randomizer(
        trials={"linear": 10},
        config=RandomizerConfig(rapidity=5),
        random_fn=lambda: 0.0,
    )
    assert randomizer.linear_ramp() == pytest.approx(0.5)


def test_reset_helpers():
    randomizer = Randomizer(trials=3)

    randomizer.reset_linear()
    assert randomizer.counters == TrialCounters(linear=0, nearing=3, exponential=3)
    randomizer.reset_nearing()
    assert randomizer.counters == TrialCounters(linear=0, nearing=0, exponential=3)

    randomizer.counters.increment("linear", 4)
    randomizer.reset_all()
    assert randomizer.counters == TrialCounters()


@pytest.mark.parametrize("draw,expected", [(0.6, "x"), (0.4, None)])
def test_coin_flip_without_percentage(draw, expected):
    assert _randomizer(draw).coin_flip("x") == expected


@pytest.mark.parametrize(
    "percentage,draw,expected",
    [
        ("30%", 0.29, "x"),
        ("30%", 0.30, None),
        (30, 0.29, "x"),
        ("150%", 0.999, "x"),
        ("100%", 0.999, "x"),
        ("0%", 0.0, None),
        ("-5%", 0.0, None),
        ("abc%", 0.0, None),
        ("30", 0.0, None),
    ],
)
def test_coin_flip_with_percentage(percentage, draw, expected):
    assert _randomizer(draw).coin_flip("x", percentage) == expected


def test_weighted_choice_and_partition():
    randomizer = _randomizer(0.45)
    values = ["a", ("d", 6), ("e", 3), ("g", "30%"), ("f", "20%")]

    assert randomizer.weighted_choice(values) == "f"
    assert sum(entry.probability for entry in randomizer.partition(values)) == pytest.approx(1.0, abs=1e-9)


def test_from_order_uses_config_bounds():
    randomizer = Randomizer(config=RandomizerConfig(order_ceiling=4, order_floor=1), random_fn=lambda: 0.0)
    assert randomizer.from_order(["a", "b"]) == "a"

    with pytest.raises(InvalidRangeError):
        randomizer.from_order(["a", "b"], ceiling=1)


def test_seeded_randomizers_repeat():
    first = Randomizer(config=RandomizerConfig(seed=7))
    second = Randomizer(config=RandomizerConfig(seed=7))

    assert [first.draw() for _ in range(5)] == [second.draw() for _ in range(5)]
