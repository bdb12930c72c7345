import numpy as np
import pytest
from scipy import stats

from extradist import DiscreteUniform, ddunif, pdunif, qdunif, rdunif
from extradist.exceptions import DomainWarning, NonIntegerWarning


REF = stats.randint(1, 11)


def test_pmf_and_cdf_match_scipy():
    x = np.arange(-2.0, 14.0)
    np.testing.assert_allclose(ddunif(x, 1, 10), REF.pmf(x))
    np.testing.assert_allclose(pdunif(x, 1, 10), REF.cdf(x))
    np.testing.assert_allclose(pdunif(x + 0.5, 1, 10), REF.cdf(x))


def test_cdf_at_midpoint():
    np.testing.assert_allclose(pdunif(5, 1, 10), [0.5])


def test_non_integer_warning_only_inside_range():
    with pytest.warns(NonIntegerWarning):
        assert ddunif([2.5], 1, 10)[0] == 0.0


def test_non_integer_outside_range_is_silent(no_warnings):
    assert ddunif([20.5], 1, 10)[0] == 0.0


def test_quantile():
    p = np.array([0.0, 0.05, 0.1, 0.55, 1.0])
    q = qdunif(p, 1, 10)
    np.testing.assert_array_equal(q, [1.0, 1.0, 1.0, 6.0, 10.0])
    assert (pdunif(q, 1, 10) >= p).all()


def test_quantile_at_exact_cdf_steps():
    for n in range(1, 60):
        k = np.arange(1.0, n + 1.0)
        np.testing.assert_array_equal(qdunif(k / n, 1, n), k)
        np.testing.assert_array_equal(qdunif(k / n, 0, n - 1), k - 1.0)


def test_single_point_support():
    np.testing.assert_array_equal(ddunif([3.0, 4.0], 3, 3), [1.0, 0.0])
    np.testing.assert_array_equal(pdunif([2.0, 3.0], 3, 3), [0.0, 1.0])


def test_invalid_bounds():
    with pytest.warns(DomainWarning):
        out = ddunif([1.0, 1.0, 1.0], [1.0, 5.0, -np.inf], [4.0, 2.0, 3.0])
    assert out[0] == 0.25
    assert np.isnan(out[1:]).all()


def test_sampler(rng):
    draws = rdunif(6000, 1, 6, rng=rng)
    assert set(np.unique(draws)) == {1.0, 2.0, 3.0, 4.0, 5.0, 6.0}
    assert abs(draws.mean() - 3.5) < 0.1


def test_sampler_missing_parameter_is_nan_with_warning(rng):
    with pytest.warns(DomainWarning, match="NAs produced"):
        draws = rdunif(2, 1, [6.0, np.nan], rng=rng)
    assert 1.0 <= draws[0] <= 6.0 and np.isnan(draws[1])


def test_distribution_object():
    d = DiscreteUniform(min=0, max=3)
    np.testing.assert_allclose(d.cdf([1], lower_tail=False), [0.5])
    np.testing.assert_array_equal(d.inv_cdf([0.5]), [1.0])
