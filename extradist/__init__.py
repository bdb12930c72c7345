"""Vectorized density, cdf, quantile and sampling functions for extra distributions."""
import logging

from extradist.config import Config, get_config
from extradist.core import CDFTable, Distribution, RecycledArrays, RecycledDistribution, recycle
from extradist.distributions import *
from extradist.exceptions import *

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
