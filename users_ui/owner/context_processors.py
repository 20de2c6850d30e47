# users_ui/owner/context_processors.py
from django.urls import reverse

from accounts.session import DashboardSession

FLASH_KEYS = ('error_message', 'success_message', 'info_message')

# Pages rendered without the owner sidebar
NO_MENU_PREFIXES = ('/accounts/', '/waiter/', '/cashier/', '/bar/', '/admin-dashboard/')


def owner_menu(request):
    """Sidebar items and the signed-in owner's names for every owner page."""
    if request.path.startswith(NO_MENU_PREFIXES):
        return {}

    menu_items = [
        {'name': 'Dashboard', 'url': reverse('owner:dashboard'), 'icon': 'home', 'key': 'dashboard'},
        {'name': 'Dispositivos', 'url': reverse('owner:devices'), 'icon': 'monitor', 'key': 'devices'},
        {'name': 'Pedidos', 'url': reverse('owner:orders'), 'icon': 'receipt', 'key': 'orders'},
        {'name': 'Inventario', 'url': reverse('owner:inventory'), 'icon': 'box', 'key': 'inventory'},
        {'name': 'Catálogo', 'url': reverse('owner:catalog'), 'icon': 'tag', 'key': 'catalog'},
        {'name': 'Personal', 'url': reverse('owner:staff'), 'icon': 'users', 'key': 'staff'},
        {'name': 'Reportes', 'url': reverse('owner:reports'), 'icon': 'chart', 'key': 'reports'},
        {'name': 'Registros', 'url': reverse('owner:logs'), 'icon': 'list', 'key': 'logs'},
        {'name': 'Planes', 'url': reverse('owner:plans'), 'icon': 'star', 'key': 'plans'},
        {'name': 'Panel de Roles', 'url': reverse('panel:index'), 'icon': 'lock', 'key': 'panel'},
    ]

    path_prefixes = [
        ('/devices', 'devices'),
        ('/orders', 'orders'),
        ('/inventory', 'inventory'),
        ('/catalog', 'catalog'),
        ('/staff', 'staff'),
        ('/reports', 'reports'),
        ('/logs', 'logs'),
        ('/plans', 'plans'),
        ('/admin-panel', 'panel'),
    ]

    current_path = request.path.rstrip('/')
    active_key = 'dashboard'
    for prefix, key in path_prefixes:
        if current_path.startswith(prefix):
            active_key = key
            break

    active_label = next((item['name'] for item in menu_items if item['key'] == active_key), 'Dashboard')

    session = DashboardSession(request.session)
    return {
        'menu_items': menu_items,
        'active_menu': active_key,
        'active_menu_label': active_label,
        'user_name': session.user_name,
        'business_name': session.business_name,
    }


def flash_messages(request):
    """One-shot banners set by a redirecting view; read once, then gone."""
    session = getattr(request, 'session', None)
    if session is None:
        return {}
    return {key: session.pop(key) for key in FLASH_KEYS if key in session}
