from flask import Request, Response

from app.config.settings import Settings
from app.entitlement.ledger import EntitlementLedger
from app.entitlement.models import EntitlementState


def read_entitlement(request: Request, ledger: EntitlementLedger, settings: Settings) -> EntitlementState:
    return ledger.read_state(
        request.cookies.get(settings.premium_cookie_name),
        request.cookies.get(settings.usage_cookie_name),
    )


def set_entitlement_cookie(response: Response, settings: Settings, name: str, token: str) -> None:
    response.set_cookie(
        name,
        token,
        max_age=settings.entitlement_cookie_max_age_seconds,
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite="Lax",
    )
