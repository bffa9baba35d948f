"""
ndmig - Ballsdex instance discovery and database export tool
"""

__version__ = "0.1.0"

from .core import Ndmig
from .errors import NdmigError

__all__ = ["Ndmig", "NdmigError"]
