__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'libcli'
__author__ = 'libcli contributors'
__license__ = 'MIT'
__version__ = "0.1.0"

from .faults import *
from .policies import *
from .specs import *
from .config import *
from .usage import *
from .input import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the arity policies
__all__ += policies.__all__  # type: ignore[attr-defined]
# Load the exposed API of the specifications
__all__ += specs.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser
__all__ += config.__all__  # type: ignore[attr-defined]
# Load the exposed API of the usage renderer
__all__ += usage.__all__  # type: ignore[attr-defined]
# Load the exposed API of the input helpers
__all__ += input.__all__  # type: ignore[attr-defined]
