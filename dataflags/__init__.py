__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'dataflags'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .binder import *
from .converters import *
from .faults import *
from .filler import *
from .flagset import *
from .lists import *
from .nodes import *
from .numbers import *
from .registry import *
from .scanner import *
from .tags import *
from .text import *
from .values import *

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

# Load the exposed API of every submodule
__all__ += binder.__all__  # type: ignore[attr-defined]
__all__ += converters.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += filler.__all__  # type: ignore[attr-defined]
__all__ += flagset.__all__  # type: ignore[attr-defined]
__all__ += lists.__all__  # type: ignore[attr-defined]
__all__ += nodes.__all__  # type: ignore[attr-defined]
__all__ += numbers.__all__  # type: ignore[attr-defined]
__all__ += registry.__all__  # type: ignore[attr-defined]
__all__ += scanner.__all__  # type: ignore[attr-defined]
__all__ += tags.__all__  # type: ignore[attr-defined]
__all__ += text.__all__  # type: ignore[attr-defined]
__all__ += values.__all__  # type: ignore[attr-defined]
