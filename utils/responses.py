from flask import request

TEXT_PLAIN = {"Content-Type": "text/plain; charset=utf-8"}


def plain(message: str, status: int):
    return message, status, TEXT_PLAIN


def form_data():
    """Form fields from an HTML post, or the JSON body when it is an object."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form
