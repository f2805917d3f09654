"""Public interface definitions for the shelter platform backend.

The dashboard talks to the platform exclusively through these abstract base
classes.  Concrete adapters are injected at runtime (see ``shelterpost/main.py``),
so the same services run against the live API, the in-memory stub, or a
mock in unit tests.

CONCRETE PROVIDER MAP:
    Interface          →  Concrete implementations (in shelterpost/providers/)
    ─────────────────────────────────────────────────────────────────────
    IPostBackend       →  HttpPostProvider, StubPostProvider
    ICategoryBackend   →  HttpCategoryProvider, StubCategoryProvider
"""

from shelterpost.interfaces.category_backend import ICategoryBackend
from shelterpost.interfaces.post_backend import IPostBackend

__all__ = [
    "ICategoryBackend",
    "IPostBackend",
]
