from importlib.metadata import PackageNotFoundError, version

from .data import BatchIterator, DataLoader
from .errors import DimensionMismatch, InvalidArgument
from .utils import ncycle
from . import data, utils

try:
	__version__ = version("batchloader")
except PackageNotFoundError:  # pragma: no cover
	__version__ = "0.1.0"

__all__ = [
	"BatchIterator",
	"DataLoader",
	"DimensionMismatch",
	"InvalidArgument",
	"ncycle",
	"__version__",
	"data",
	"utils",
]
