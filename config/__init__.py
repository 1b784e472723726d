from .settings import *  # noqa: F401,F403
from .categories import DEFAULT_REGISTRY  # noqa: F401
from .field_specs import FIELD_SPECS, FIELD_SPECS_BY_FIELD  # noqa: F401
