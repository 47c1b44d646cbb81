"""
Test helpers.
"""
from teamaccess.auth.local import LocalAuthService

AJAX_HEADERS = {"X-Requested-With": "XMLHttpRequest"}


def auth_headers_for(user, ajax: bool = True) -> dict:
    """Bearer token headers, marked as an ajax request by default"""
    token = LocalAuthService().create_access_token(user)
    headers = {"Authorization": f"Bearer {token}"}
    if ajax:
        headers.update(AJAX_HEADERS)
    return headers
