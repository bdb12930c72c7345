from . import (beta_binomial, discrete_laplace, discrete_uniform, fatigue, gamma_poisson,
               gpd, mixnorm, multinomial, pareto, power, zib)
from .beta_binomial import *
from .discrete_laplace import *
from .discrete_uniform import *
from .fatigue import *
from .gamma_poisson import *
from .gpd import *
from .mixnorm import *
from .multinomial import *
from .pareto import *
from .power import *
from .zib import *

__all__ = [
    name
    for module in (beta_binomial, discrete_laplace, discrete_uniform, fatigue, gamma_poisson,
                   gpd, mixnorm, multinomial, pareto, power, zib)
    for name in module.__all__
]
