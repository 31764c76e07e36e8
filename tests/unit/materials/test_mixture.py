import dataclasses
import logging
import math
import numpy as np
import pandas as pd
import pytest
import thermophysical_properties as tp
from thermophysical_properties.materials import blend_scalar, create_mixture

P = 101325.0

# Slots whose refit recovers the source coefficients when the blend is a pure source
COEFFICIENT_SLOTS = ["rho", "pv", "hl", "Cp", "h", "Cpg", "mu", "kappa", "sigma", "D"]


def cp_liquid(name, coefficients, family=tp.NSRDS0, T_range=None, **scalars):
    return tp.LiquidProperties(name, {"Cp": family(coefficients=coefficients, T_range=T_range)}, **scalars)


@pytest.mark.parametrize("fraction", [1.0, 0.0])
def test_pure_source_fraction_reproduces_the_source(decane, heptane, fraction):
    builder = tp.MixtureBuilder(tp.MixtureSpec(decane, heptane, fraction))
    mixture = builder.build()
    source = decane if fraction == 1.0 else heptane
    for slot in COEFFICIENT_SLOTS:
        np.testing.assert_allclose(mixture[slot].coefficients, source[slot].coefficients, rtol=1e-6, atol=1e-7, err_msg=slot)
    report = builder.report()
    for slot in ("B", "mug", "kappag"):
        assert report.loc[slot, "max_deviation"] < 1e-6


def test_polynomial_blend_is_exact():
    first = cp_liquid("A", [1000.0, 1.0, 0.0, 0.0, 0.0, 0.0])
    second = cp_liquid("B", [2000.0, -1.0, 0.001, 0.0, 0.0, 0.0])
    builder = tp.MixtureBuilder(tp.MixtureSpec(first, second, 0.3, tp.MixtureFitConfig(T_range=(300.0, 500.0))))
    mixture = builder.build()
    assert mixture.name == "A-B"
    assert mixture.defined_slots() == ["Cp"]
    np.testing.assert_allclose(mixture["Cp"].coefficients, [1700.0, -0.4, 0.0007, 0.0, 0.0, 0.0], rtol=1e-8, atol=1e-9)
    T = np.linspace(300.0, 500.0, 17)
    np.testing.assert_allclose(mixture.heat_capacity(P, T), 0.3 * first.heat_capacity(P, T) + 0.7 * second.heat_capacity(P, T), rtol=1e-9)
    assert builder.report().loc["Cp", "max_deviation"] < 1e-9


def test_density_blend_of_decane_and_heptane(decane, heptane):
    builder = tp.MixtureBuilder(tp.MixtureSpec(decane, heptane, 0.3, tp.MixtureFitConfig(T_range=(280.0, 420.0))))
    rho = builder.blend_function("rho", "mix.rho")
    assert isinstance(rho, tp.NSRDS5)
    assert rho.name == "mix.rho"
    assert rho.T_range == (280.0, 420.0)
    assert math.isclose(rho.Tc, 0.3 * 617.7 + 0.7 * 540.2)
    T = np.linspace(280.0, 420.0, 71)
    target = 0.3 * decane.density(P, T) + 0.7 * heptane.density(P, T)
    assert np.max(np.abs(rho.f(P, T) - target)) / np.max(target) < 1e-3


@pytest.mark.parametrize("fraction", [1.0, 0.0])
def test_pure_source_keeps_constant_exponent_term(fraction):
    # With e = 0 the d*T^e term is a constant next to a: d is kept as given
    first = tp.LiquidProperties("A", {"mu": tp.NSRDS1(coefficients=[-16.0, 1500.0, 0.7, 0.5, 0.0])})
    second = tp.LiquidProperties("B", {"mu": tp.NSRDS1(coefficients=[-15.0, 1400.0, 0.6, 0.2, 0.0])})
    mixture = tp.MixtureBuilder(tp.MixtureSpec(first, second, fraction, tp.MixtureFitConfig(T_range=(300.0, 500.0)))).build()
    source = first if fraction == 1.0 else second
    np.testing.assert_allclose(mixture["mu"].coefficients, source["mu"].coefficients, rtol=1e-6, atol=1e-7)


def test_vapour_pressure_blend_with_different_exponents():
    first = tp.LiquidProperties("A", {"pv": tp.NSRDS1(coefficients=[87.829, -6996.4, -9.8802, 7.21e-6, 2.0])})
    second = tp.LiquidProperties("B", {"pv": tp.NSRDS1(coefficients=[80.0, -7500.0, -9.0, 0.0, 0.0])})
    builder = tp.MixtureBuilder(tp.MixtureSpec(first, second, 0.3, tp.MixtureFitConfig(T_range=(250.0, 530.0))))
    pv = builder.blend_function("pv")
    assert builder.report().loc["pv", "max_deviation"] < 1e-3
    T = np.linspace(250.0, 530.0, 57)
    target = 0.3 * first.vapour_pressure(P, T) + 0.7 * second.vapour_pressure(P, T)
    assert np.max(np.abs(pv.f(P, T) - target)) / np.max(target) < 1e-3


def test_family_mismatch_is_rejected():
    builder = tp.MixtureBuilder(tp.MixtureSpec(
        cp_liquid("A", [1.0] * 6),
        cp_liquid("B", [1.0] * 5, family=tp.NSRDS4),
        0.5, tp.MixtureFitConfig(T_range=(300.0, 400.0)),
    ))
    with pytest.raises(tp.IncompatibleCorrelationFamilies) as error:
        builder.blend_function("Cp")
    assert "NSRDS0" in str(error.value) and "NSRDS4" in str(error.value)


def test_undefined_slots():
    builder = tp.MixtureBuilder(tp.MixtureSpec(
        cp_liquid("A", [1.0] * 6),
        tp.LiquidProperties("B", {}),
        0.5, tp.MixtureFitConfig(T_range=(300.0, 400.0)),
    ))
    # defined + undefined
    with pytest.raises(tp.IncompatibleCorrelationFamilies):
        builder.blend_function("Cp")
    # undefined + undefined stays undefined
    mu = builder.blend_function("mu", "A-B.mu")
    assert isinstance(mu, tp.NoneFunction)
    with pytest.raises(tp.UndefinedFunction):
        mu.f(P, 350.0)


def test_scalar_blending_policies():
    assert math.isclose(blend_scalar("weighted", 500.0, 600.0, 0.3), 570.0)
    assert blend_scalar("min", 500.0, 600.0, 0.3) == 500.0
    assert blend_scalar("max", 500.0, 600.0, 0.3) == 600.0
    assert blend_scalar("weighted", None, 600.0, 0.3) is None
    with pytest.raises(ValueError):
        blend_scalar("harmonic", 500.0, 600.0, 0.3)
    assert set(tp.materials.SCALAR_BLENDING) == set(tp.SCALARS)


def test_mixture_constants(decane, heptane):
    scalars = tp.MixtureBuilder(tp.MixtureSpec(decane, heptane, 0.3)).blend_scalars()
    assert math.isclose(scalars["W"], 0.3 * 142.285 + 0.7 * 100.204)
    assert math.isclose(scalars["Tc"], 0.3 * 617.7 + 0.7 * 540.2)
    assert scalars["Pc"] == 2.11e6
    assert scalars["Vc"] == 0.428
    assert scalars["Tt"] == 243.51
    assert scalars["Pt"] == 1.393


def test_fraction_outside_unit_interval(decane, heptane):
    for fraction in (-0.1, 1.5):
        with pytest.raises(ValueError):
            tp.MixtureSpec(decane, heptane, fraction)


def test_fit_config_validation():
    with pytest.raises(ValueError):
        tp.MixtureFitConfig(n_samples=1)
    with pytest.raises(ValueError):
        tp.MixtureFitConfig(T_range=(400.0, 300.0))
    config = tp.MixtureFitConfig.from_dict({"Trange": [250, 500], "nSamples": 20, "fraction": 0.3})
    assert config.T_range == (250.0, 500.0)
    assert config.n_samples == 20
    assert tp.MixtureFitConfig.from_dict(config.write()) == config


def test_reference_pressure():
    config = tp.MixtureFitConfig(p_ref=1e5)
    assert config.p_ref == 1e5
    assert tp.THERMO.p_std == 101325.0
    assert tp.MixtureFitConfig().p_ref == 101325.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        tp.THERMO.p_std = 1e5


def test_default_working_ranges(decane, heptane):
    builder = tp.MixtureBuilder(tp.MixtureSpec(decane, heptane, 0.3))
    # liquid range overlap, reduced forms kept below the lowest Tc
    assert builder.working_range("Cp") == (243.51, 540.2)
    assert builder.working_range("mu") == (243.51, 540.2)
    T_low, T_high = builder.working_range("rho")
    assert T_low == 243.51
    assert math.isclose(T_high, 540.2 * (1.0 - 1e-3))
    capped = tp.MixtureBuilder(tp.MixtureSpec(decane, heptane, 0.3, tp.MixtureFitConfig(T_range=(300.0, 600.0))))
    assert capped.working_range("Cp") == (300.0, 600.0)
    assert math.isclose(capped.working_range("sigma")[1], 540.2 * (1.0 - 1e-3))


def test_missing_or_disjoint_ranges():
    disjoint = tp.MixtureBuilder(tp.MixtureSpec(
        cp_liquid("A", [1.0] * 6, T_range=(300.0, 400.0)),
        cp_liquid("B", [2.0] * 6, T_range=(500.0, 600.0)),
        0.5,
    ))
    with pytest.raises(tp.DomainError):
        disjoint.blend_function("Cp")
    unknown = tp.MixtureBuilder(tp.MixtureSpec(cp_liquid("A", [1.0] * 6), cp_liquid("B", [2.0] * 6), 0.5))
    with pytest.raises(tp.DomainError):
        unknown.working_range("Cp")
    from_liquids = tp.MixtureBuilder(tp.MixtureSpec(
        cp_liquid("A", [1.0] * 6, Tt=250.0, Tc=500.0),
        cp_liquid("B", [2.0] * 6, T_range=(300.0, 600.0)),
        0.5,
    ))
    assert from_liquids.working_range("Cp") == (300.0, 500.0)


def test_fitting_range_and_samples_are_honoured(decane, heptane):
    builder = tp.MixtureBuilder(tp.MixtureSpec(decane, heptane, 0.3, tp.MixtureFitConfig(T_range=(300.0, 350.0), n_samples=20)))
    Cp = builder.blend_function("Cp")
    assert Cp.T_range == (300.0, 350.0)
    assert builder.report().loc["Cp", "n_samples"] == 20


def test_report(decane, heptane):
    builder = tp.MixtureBuilder(tp.MixtureSpec(decane, heptane, 0.3, tp.MixtureFitConfig(T_range=(280.0, 420.0))))
    assert builder.report().empty
    builder.build("mix")
    report = builder.report()
    assert isinstance(report, pd.DataFrame)
    assert list(report.index) == list(tp.SLOTS)
    assert list(report.columns) == ["family", "T_low", "T_high", "n_samples", "max_deviation"]
    assert report.loc["rho", "family"] == "NSRDS5"
    assert report.loc["Cp", "max_deviation"] < 1e-9


def test_poor_fit_is_logged(decane, heptane, caplog):
    builder = tp.MixtureBuilder(tp.MixtureSpec(decane, heptane, 0.3, tp.MixtureFitConfig(T_range=(280.0, 420.0), tolerance=1e-15)))
    with caplog.at_level(logging.WARNING, logger="thermophysical_properties.materials.mixture"):
        builder.blend_function("rho", "mix.rho")
    assert "Poor fit for mix.rho" in caplog.text


def test_mixture_write_round_trip(decane, heptane):
    mixture = tp.MixtureBuilder(tp.MixtureSpec(decane, heptane, 0.3, tp.MixtureFitConfig(T_range=(280.0, 420.0)))).build("mix")
    record = mixture.write()
    assert record["type"] == "liquid"
    assert record["rho"]["validityRange"] == [280.0, 420.0]
    copy = tp.MATERIALS.create("liquid", record, name="mix")
    T = np.linspace(280.0, 420.0, 9)
    for slot in mixture.defined_slots():
        np.testing.assert_allclose(copy[slot].f(P, T), mixture[slot].f(P, T), rtol=1e-12)


def test_mixture_from_configuration(liquids_config):
    config = dict(liquids_config)
    config["blend"] = {"type": "mixture", "components": ["C7H16", "C10H22"], "fraction": 0.7, "Trange": [280.0, 420.0], "nSamples": 30}
    materials = tp.load_materials(config)
    blend = materials["blend"]
    assert blend["rho"].T_range == (280.0, 420.0)
    assert math.isclose(blend.W, 0.7 * 100.204 + 0.3 * 142.285)
    T = np.linspace(280.0, 420.0, 15)
    target = 0.7 * materials["C7H16"].density(P, T) + 0.3 * materials["C10H22"].density(P, T)
    np.testing.assert_allclose(blend.density(P, T), target, rtol=1e-3)


def test_mixture_components(decane, heptane):
    record = {"components": ["C10H22", "C8H18"], "fraction": 0.5}
    with pytest.raises(KeyError):
        create_mixture("blend", record, {"C10H22": decane})
    with pytest.raises(KeyError):
        tp.load_materials({"blend": {"type": "mixture", **record}})
    with pytest.raises(ValueError):
        create_mixture("blend", {"components": ["C10H22"], "fraction": 0.5}, {"C10H22": decane})
    with pytest.raises(ValueError):
        tp.load_materials({"blend": {"type": "mixture", "components": ["blend", "C10H22"], "fraction": 0.5}})
