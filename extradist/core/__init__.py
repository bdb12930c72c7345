from .dispatch import Diagnostics
from .distributions import Distribution, RecycledDistribution
from .recycling import RecycledArrays, recycle
from .tables import CDFTable, TableCache
