# accounts/views.py
import logging

from django.shortcuts import render, redirect

from core.api_client import ApiError, PosApiClient

from .forms import LoginForm, RegisterForm
from .session import DashboardSession

logger = logging.getLogger(__name__)

LICENSE_KEY_SESSION_KEY = "license_key"
DEFAULT_LOGIN_ERROR = "Credenciales inválidas"
DEFAULT_REGISTER_ERROR = "Error al registrarse. Inténtalo de nuevo."


def _auth_error(e: ApiError, default: str) -> str:
    # Transport failures keep their own text; backend rejections use its message
    if e.status_code is None:
        return e.message
    return e.detail or default


# -------------------------------------------------------------------
# Login view
# -------------------------------------------------------------------
def login_view(request):
    """Owner login against POST /auth/login; the token lands in the session."""
    session = DashboardSession(request.session)
    if request.method == "GET" and session.is_authenticated:
        return redirect("owner:dashboard")

    form = LoginForm(request.POST or None)
    error = None

    if request.method == "POST" and form.is_valid():
        client = PosApiClient(session)
        try:
            data = client.login(form.cleaned_data["email"], form.cleaned_data["password"]) or {}
        except ApiError as e:
            error = _auth_error(e, DEFAULT_LOGIN_ERROR)
        else:
            if data.get("token"):
                session.login(data["token"], data.get("user"), data.get("business"))
                logger.info("Owner %s signed in", form.cleaned_data["email"])
                return redirect("owner:dashboard")
            error = DEFAULT_LOGIN_ERROR

    return render(request, "accounts/login.html", {"form": form, "error": error})


# -------------------------------------------------------------------
# Register view
# -------------------------------------------------------------------
def register_view(request):
    """
    Owner registration. The backend creates the business and its license;
    the generated key is shown once on the license page.
    """
    session = DashboardSession(request.session)
    form = RegisterForm(request.POST or None)
    error = None

    if request.method == "POST" and form.is_valid():
        client = PosApiClient(session)
        try:
            data = client.register(
                form.cleaned_data["name"],
                form.cleaned_data["email"],
                form.cleaned_data["password"],
            ) or {}
        except ApiError as e:
            error = _auth_error(e, DEFAULT_REGISTER_ERROR)
        else:
            if data.get("token"):
                business = dict(data.get("business") or {})
                if not business.get("name") and form.cleaned_data.get("business_name"):
                    business["name"] = form.cleaned_data["business_name"]
                session.login(data["token"], data.get("user"), business)
                request.session[LICENSE_KEY_SESSION_KEY] = data.get("licenseKey") or ""
                logger.info("Registered business %s", business.get("id"))
                return redirect("accounts:license")
            error = DEFAULT_REGISTER_ERROR

    return render(request, "accounts/register.html", {"form": form, "error": error})


def license_view(request):
    """Show the license key produced by registration, once."""
    if LICENSE_KEY_SESSION_KEY not in request.session:
        return redirect("owner:dashboard")
    license_key = request.session.pop(LICENSE_KEY_SESSION_KEY)
    return render(request, "accounts/license.html", {"license_key": license_key})


# -------------------------------------------------------------------
# Logout view
# -------------------------------------------------------------------
def logout_view(request):
    """Clear every session key, dialog state included, and go back to login."""
    DashboardSession(request.session).logout()
    request.session["info_message"] = "Sesión cerrada"
    return redirect("accounts:login")
