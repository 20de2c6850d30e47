# users_ui/panel/panel_views.py
import logging

from django.http import Http404, HttpResponseBadRequest
from django.shortcuts import redirect
from django.views.decorators.http import require_POST

from core import queries
from core.api_client import ApiError
from core.core_models import WorkingSets, build_working_sets
from users_ui.owner.base_views import load_or_error, owner_view

from .pin_gate import GateCategory, PIN_LENGTH, RoleGate, accounts_for

logger = logging.getLogger(__name__)

GATES_SESSION_KEY = "pin_gates"

CATEGORY_LABELS = {
    GateCategory.WAITER: "Mozos",
    GateCategory.CASHIER: "Cajeros",
    GateCategory.BARMAN: "Barman",
    GateCategory.MANAGEMENT: "Administración",
}

KEYPAD_ROWS = [["1", "2", "3"], ["4", "5", "6"], ["7", "8", "9"], ["clear", "0", "back"]]


# -------------------------
# Session helpers
# -------------------------
def _load_gates(request):
    stored = request.session.get(GATES_SESSION_KEY) or {}
    return {category: RoleGate.from_dict(category, stored.get(category.value)) for category in GateCategory}


def _save_gates(request, gates):
    # PINs never reach the session; only ids, masked progress and errors
    request.session[GATES_SESSION_KEY] = {category.value: gate.to_dict() for category, gate in gates.items()}


def _category_or_404(value):
    try:
        return GateCategory(value)
    except ValueError:
        raise Http404(f"Unknown role category: {value}")


def _working_sets(client):
    return build_working_sets(queries.get_staff_accounts(client))


# -------------------------
# Panel page
# -------------------------
@owner_view("panel/admin_panel.html")
def index(request, client):
    context = {}
    working_sets = load_or_error(context, "working_sets", _working_sets, WorkingSets(), client)
    gates = _load_gates(request)

    context["panels"] = [
        {
            "category": category.value,
            "label": CATEGORY_LABELS[category],
            "accounts": [{"id": a.id, "name": a.name, "role": a.role}
                         for a in accounts_for(category, working_sets)],
            "gate": gate,
            "state": gate.state.value,
            "masked": gate.masked_digits.ljust(PIN_LENGTH, "·"),
        }
        for category, gate in gates.items()
    ]
    context["keypad_rows"] = KEYPAD_ROWS
    del context["working_sets"]
    return context


# -------------------------
# Dialog actions (POST, redirect back)
# -------------------------
def _gate_action(action):
    """
    Wrap a dialog action: fetch the eligible accounts, load the gate,
    run the action, persist the gate and redirect. An action may return a
    NavigationTarget, in which case the browser goes there instead.
    """
    @require_POST
    @owner_view()
    def _view(request, client, category):
        category = _category_or_404(category)
        try:
            accounts = accounts_for(category, _working_sets(client))
        except ApiError as e:
            logger.error("Staff directory unavailable: %s", e.message)
            request.session["error_message"] = e.message
            return redirect("panel:index")

        gates = _load_gates(request)
        gate = gates[category]
        try:
            target = action(request, gate, accounts)
        except ValueError as e:
            return HttpResponseBadRequest(str(e))
        _save_gates(request, gates)

        if target is not None:
            return redirect(target.url)
        return redirect("panel:index")

    _view.__name__ = action.__name__
    return _view


@_gate_action
def open_gate(request, gate, accounts):
    gate.open(accounts)


@_gate_action
def select_account(request, gate, accounts):
    gate.select(request.POST.get("account_id"), accounts)


@_gate_action
def press_key(request, gate, accounts):
    return gate.press(request.POST.get("key", ""), accounts)


@_gate_action
def close_gate(request, gate, accounts):
    gate.close()
