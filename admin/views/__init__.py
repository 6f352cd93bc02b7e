# admin/views/__init__.py
from .dashboard import NAV_KEY, page_dashboard
from .measures import page_measures
from .products import page_products

PAGES = ["Dashboard", "Measures", "Products"]

_PAGES = {
    "Dashboard": page_dashboard,
    "Measures": page_measures,
    "Products": page_products,
}


def admin_router(choice: str, catalog):
    # Unknown choice falls back to the dashboard
    return _PAGES.get(choice, page_dashboard)(catalog)
