__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'pacargs'
__author__ = 'The pacargs Authors'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .arguments import *
from .faults import *
from .grammar import *
from .parser import *
from .settings import *
from .sources import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the arguments
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the grammar
__all__ += grammar.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the settings
__all__ += settings.__all__  # type: ignore[attr-defined]
# Load the exposed API of the sources
__all__ += sources.__all__  # type: ignore[attr-defined]
