from flask import Blueprint, session
from app.version import API_PREFIX
from app.services.session_state import load_state, save_state, reduce

storefront_bp = Blueprint("storefront", __name__, url_prefix=API_PREFIX)


def apply_action(action):
    """Reduce the session's storefront state with ``action`` and store the result."""
    state = reduce(load_state(session), action)
    save_state(session, state)
    return state


from . import menu  # noqa: E402
from . import cart  # noqa: E402
from . import orders  # noqa: E402
from . import availability  # noqa: E402
