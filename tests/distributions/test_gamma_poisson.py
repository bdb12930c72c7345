import warnings

import numpy as np
import pytest
from scipy import stats

from extradist import GammaPoisson, dgpois, pgpois, rgpois
from extradist.config import get_config
from extradist.exceptions import CoercionWarning, DomainWarning


ALPHA, BETA = 2.5, 1.5
REF = stats.nbinom(ALPHA, 1.0 / (1.0 + BETA))
K = np.arange(0.0, 40.0)


def test_pmf_matches_negative_binomial():
    np.testing.assert_allclose(dgpois(K, ALPHA, BETA), REF.pmf(K), rtol=1e-10)
    np.testing.assert_allclose(dgpois(K, ALPHA, BETA, log=True), REF.logpmf(K), rtol=1e-10)


def test_pmf_outside_support(no_warnings):
    np.testing.assert_array_equal(dgpois([-1.0, np.inf], ALPHA, BETA), [0.0, 0.0])


def test_cdf_matches_negative_binomial():
    np.testing.assert_allclose(pgpois(K, ALPHA, BETA), REF.cdf(K), rtol=1e-10)
    np.testing.assert_allclose(pgpois(K[:10] + 0.5, ALPHA, BETA), REF.cdf(K[:10]), rtol=1e-10)
    np.testing.assert_allclose(pgpois(K[:10], ALPHA, BETA, lower_tail=False), REF.sf(K[:10]), rtol=1e-9)


def test_cdf_against_direct_summation():
    x = np.array([0.0, 3.0, 17.0, 60.0])
    direct = np.array([dgpois(np.arange(k + 1), ALPHA, BETA).sum() for k in x])
    np.testing.assert_allclose(pgpois(x, ALPHA, BETA), direct, atol=1e-9)


def test_cdf_limits():
    np.testing.assert_array_equal(pgpois([-3.0, np.inf], ALPHA, BETA), [0.0, 1.0])


def test_cdf_mixed_parameters_share_one_call():
    x = np.array([2.0, 5.0, 2.0, 5.0])
    alpha = np.array([1.0, 3.0])
    out = pgpois(x, alpha, BETA)
    for i in range(4):
        ref = stats.nbinom(alpha[i % 2], 1.0 / (1.0 + BETA))
        assert out[i] == pytest.approx(ref.cdf(x[i]), rel=1e-10)


def test_cdf_beyond_table_range_is_coerced():
    huge = float(get_config().max_table_index) * 2.0
    with pytest.warns(CoercionWarning):
        out = pgpois([huge, 1.0], ALPHA, BETA)
    assert np.isnan(out[0]) and np.isfinite(out[1])


def test_invalid_parameters():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        out = pgpois([1.0, 1.0, 1.0], [1.0, 0.0, 1.0], [1.0, 1.0, -1.0])
    assert [w.category for w in caught] == [DomainWarning]
    assert np.isfinite(out[0]) and np.isnan(out[1:]).all()


def test_checkpoint_can_abort():
    class Cancelled(Exception):
        pass

    calls = []

    def checkpoint():
        calls.append(1)
        if len(calls) == 2:
            raise Cancelled

    with pytest.raises(Cancelled):
        pgpois(np.arange(3000.0) % 50, ALPHA, BETA, checkpoint=checkpoint)
    assert len(calls) == 2


def test_sampler(rng):
    draws = rgpois(5000, ALPHA, BETA, rng=rng)
    assert np.all(draws == np.floor(draws)) and (draws >= 0).all()
    assert abs(draws.mean() - ALPHA * BETA) < 0.15


def test_distribution_object():
    d = GammaPoisson(ALPHA, BETA)
    np.testing.assert_allclose(d.cdf([4.0]), REF.cdf([4.0]), rtol=1e-10)
    with pytest.raises(NotImplementedError):
        d.inv_cdf([0.5])
