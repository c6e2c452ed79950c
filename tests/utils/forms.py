"""
Helpers for submitting the HTML forms the way a browser does: load the page,
take the hidden CSRF token, post it back with the fields.
"""

import re

CSRF_FIELD = re.compile(r'name="csrf_token" value="([^"]+)"')


def csrf_token(client, page: str = "/login") -> str:
    response = client.get(page)
    match = CSRF_FIELD.search(response.text)
    assert match, f"no CSRF token rendered on {page}"
    return match.group(1)


def submit_form(client, action: str, data=None, page=None, **kwargs):
    """POST `data` to `action` with a token taken from `page` (default: `action`)"""
    fields = dict(data or {})
    fields.setdefault("csrf_token", csrf_token(client, page or action))
    return client.post(action, data=fields, **kwargs)


def strip_csrf(html: str) -> str:
    return CSRF_FIELD.sub('name="csrf_token" value=""', html)
