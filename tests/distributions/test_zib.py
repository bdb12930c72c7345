import numpy as np
import pytest
from scipy import stats

from extradist import ZeroInflatedBinomial, dzib, pzib, qzib, rzib
from extradist.exceptions import DomainWarning


SIZE, PROB, PI = 10, 0.4, 0.2
K = np.arange(0.0, 11.0)


def _reference_pmf(k):
    pmf = (1 - PI) * stats.binom.pmf(k, SIZE, PROB)
    return np.where(k == 0, PI + pmf, pmf)


def test_pmf():
    np.testing.assert_allclose(dzib(K, SIZE, PROB, PI), _reference_pmf(K), rtol=1e-12)
    np.testing.assert_allclose(dzib(K, SIZE, PROB, PI).sum(), 1.0)


def test_cdf():
    expected = np.cumsum(_reference_pmf(K))
    np.testing.assert_allclose(pzib(K, SIZE, PROB, PI), expected, rtol=1e-12)
    np.testing.assert_allclose(pzib(K + 0.3, SIZE, PROB, PI), expected, rtol=1e-12)
    np.testing.assert_array_equal(pzib([-1.0, np.inf], SIZE, PROB, PI), [0.0, 1.0])


def test_quantile():
    p = np.array([0.0, 0.1, 0.2, 0.5, 0.9, 1.0])
    q = qzib(p, SIZE, PROB, PI)
    assert q[0] == 0.0 and q[1] == 0.0 and q[-1] == SIZE
    assert (pzib(q, SIZE, PROB, PI) >= p - 1e-12).all()
    inner = q > 0
    assert (pzib(q[inner] - 1.0, SIZE, PROB, PI) < p[inner]).all()


def test_full_inflation():
    np.testing.assert_array_equal(qzib([0.3, 1.0], SIZE, PROB, 1.0), [0.0, 0.0])
    np.testing.assert_array_equal(dzib([0.0, 1.0], SIZE, PROB, 1.0), [1.0, 0.0])


def test_invalid_parameters():
    with pytest.warns(DomainWarning) as record:
        out = dzib(1.0, [10.0, 2.5, 10.0, 10.0], [0.4, 0.4, 1.5, 0.4], [0.2, 0.2, 0.2, -0.1])
    assert len(record) == 1
    assert np.isfinite(out[0])
    assert np.isnan(out[1:]).all()


def test_sampler(rng):
    draws = rzib(5000, SIZE, PROB, PI, rng=rng)
    assert ((draws >= 0) & (draws <= SIZE)).all()
    assert abs(np.mean(draws == 0) - _reference_pmf(0.0)) < 0.03
    assert abs(draws.mean() - (1 - PI) * SIZE * PROB) < 0.15


def test_distribution_object():
    d = ZeroInflatedBinomial(SIZE, PROB, PI)
    np.testing.assert_allclose(d.density([0.0]), [_reference_pmf(0.0)])
