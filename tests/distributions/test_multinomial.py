import numpy as np
import pytest
from scipy import stats

from extradist import Multinomial, dmnom, rmnom
from extradist.exceptions import DomainWarning, NonIntegerWarning, ShapeMismatchError


PROB = np.array([0.2, 0.5, 0.3])


def test_pmf_matches_scipy():
    x = np.array([[1, 2, 2], [0, 5, 0], [5, 0, 0]], dtype=float)
    np.testing.assert_allclose(dmnom(x, 5, PROB), stats.multinomial(5, PROB).pmf(x), rtol=1e-12)
    np.testing.assert_allclose(dmnom(x, 5, PROB, log=True), stats.multinomial(5, PROB).logpmf(x), rtol=1e-12)


def test_rows_not_summing_to_size_have_zero_mass(no_warnings):
    x = np.array([[1, 1, 1], [-1, 3, 3]], dtype=float)
    np.testing.assert_array_equal(dmnom(x, 5, PROB), [0.0, 0.0])
    assert dmnom(x[:1], 5, PROB, log=True)[0] == -np.inf


def test_zero_probability_category():
    prob = np.array([0.0, 0.4, 0.6])
    out = dmnom([[0, 1, 1], [1, 1, 0]], 2, prob)
    np.testing.assert_allclose(out, [2 * 0.4 * 0.6, 0.0])


def test_non_integer_counts_warn():
    with pytest.warns(NonIntegerWarning):
        out = dmnom([[0.5, 2.0, 2.5]], 5, PROB)
    assert out[0] == 0.0


def test_invalid_parameters_are_nan():
    with pytest.warns(DomainWarning) as record:
        out = dmnom([1, 2, 2], [5.0, 2.5, 5.0], [[0.2, 0.5, 0.3], [0.2, 0.5, 0.3], [0.5, 0.5, 0.5]])
    assert len(record) == 1
    assert np.isfinite(out[0])
    assert np.isnan(out[1:]).all()


def test_column_mismatch_is_fatal():
    with pytest.raises(ShapeMismatchError):
        dmnom([[1, 2]], 3, PROB)


def test_sampler_rows_sum_to_size(rng):
    size = np.array([0.0, 1.0, 7.0, 100.0])
    draws = rmnom(400, size, PROB, rng=rng)
    assert draws.shape == (400, 3)
    np.testing.assert_array_equal(draws.sum(axis=1), size[np.arange(400) % 4])
    assert (draws >= 0).all()


def test_sampler_category_means(rng):
    draws = rmnom(3000, 20, PROB, rng=rng)
    np.testing.assert_allclose(draws.mean(axis=0), 20 * PROB, atol=0.2)


def test_sampler_invalid_rows(rng):
    with pytest.warns(DomainWarning, match="NAs produced"):
        draws = rmnom(4, [5.0, -1.0], PROB, rng=rng)
    assert np.isfinite(draws[::2]).all()
    assert np.isnan(draws[1::2]).all()


def test_sampler_missing_size_is_nan_with_warning(rng):
    with pytest.warns(DomainWarning, match="NAs produced"):
        draws = rmnom(2, [5.0, np.nan], PROB, rng=rng)
    assert draws[0].sum() == 5.0
    assert np.isnan(draws[1]).all()


def test_sampler_zero_draws(rng, no_warnings):
    assert rmnom(0, 5, PROB, rng=rng).shape == (0, 3)


def test_distribution_object(rng):
    d = Multinomial(size=4, prob=PROB, rng=rng)
    np.testing.assert_allclose(d.density([[2, 1, 1]]), stats.multinomial(4, PROB).pmf([2, 1, 1]))
    assert d.sample(6).shape == (6, 3)
    with pytest.raises(NotImplementedError):
        d.cdf([[1, 1, 2]])
