"""Server-rendered web pages.

Routes here render Jinja2 templates and use the signed cookie session to
carry the login token.
"""
