import logging
from functools import wraps

import pandas as pd
from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.shortcuts import redirect, render

from accounts.session import DashboardSession
from core.api_client import ApiError, PosApiClient

logger = logging.getLogger(__name__)


def owner_view(template_name=None):
    """
    Decorator for signed-in dashboard views:
    - Redirects to the login page when the session holds no token
    - Builds the session context and API client and passes the client in
    - Converts DataFrames in the returned context to record lists
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            session = DashboardSession(request.session)
            if not session.is_authenticated:
                return redirect(settings.LOGIN_URL)

            client = PosApiClient(session)
            response = view_func(request, client, *args, **kwargs)

            if isinstance(response, HttpResponse):
                return response

            # A view may return (template, context) to override the template
            if isinstance(response, tuple) and len(response) == 2:
                template_override, context = response
                template_to_use = template_override or template_name
            else:
                template_to_use = template_name
                context = response if isinstance(response, dict) else {}

            for key, value in context.items():
                if isinstance(value, pd.DataFrame):
                    # NaN/NaT render as empty rather than "nan"
                    context[key] = value.astype(object).where(value.notna(), None).to_dict("records")

            if not template_to_use:
                return JsonResponse(context)

            return render(request, template_to_use, context)

        return _wrapped_view
    return decorator


def load_or_error(context, key, loader, default, *args):
    """
    Run one fetch for a page; on ApiError keep the page alive with `default`
    and put the message into context['error_message'] for the banner.
    """
    try:
        context[key] = loader(*args)
    except ApiError as e:
        logger.error("Loading %s failed: %s", key, e.message)
        context[key] = default
        context.setdefault('error_message', e.message)
    return context[key]
