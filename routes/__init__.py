from flask import Blueprint

# single main blueprint for everything except auth and the JSON api (they have their own)
main_bp = Blueprint("main", __name__)

#  import route modules (they register on main_bp, hence the # noqa: F401)
from . import dashboard   # noqa: F401
from . import courses     # noqa: F401
from . import tools       # noqa: F401
from . import studio      # noqa: F401
from . import reports     # noqa: F401
