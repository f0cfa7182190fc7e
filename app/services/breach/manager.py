from app.services.breach.base import BreachProvider
from app.services.breach.hibp_provider import HIBPProvider


def get_breach_provider() -> BreachProvider:
    """
    Returns a new provider instance per request.
    """
    return HIBPProvider()
