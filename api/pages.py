"""
HTML fragments returned by the form endpoint.

The editor posts a plain HTML form, so every outcome is a small standalone
page. All interpolated values are escaped.
"""

from html import escape

_STYLE = (
    "body{font-family:sans-serif;padding:20px;max-width:720px;margin:auto;}"
    "h1.success{color:#2e7d32;} h1.error{color:#c62828;} h1.conflict{color:orange;}"
    "code{background:#f4f4f4;padding:2px 4px;}"
)


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html><html lang=\"en\"><head><meta charset=\"utf-8\">"
        f"<title>{escape(title)}</title><style>{_STYLE}</style></head>"
        f"<body>{body}</body></html>"
    )


def success_page(
    exercise_name: str,
    group_name: str,
    file_path: str,
    is_update: bool,
) -> str:
    """200 page after a successful commit."""
    if is_update:
        summary = f"Exercise <strong>{escape(exercise_name)}</strong> updated."
    else:
        summary = (
            f"Exercise <strong>{escape(exercise_name)}</strong> added to group "
            f"<strong>{escape(group_name)}</strong>."
        )
    return _page(
        "Saved",
        "<h1 class=\"success\">Saved successfully!</h1>"
        f"<p>{summary}</p>"
        f"<p>The file <code>{escape(file_path)}</code> has been updated on GitHub.</p>"
        "<p><strong>Important:</strong> run <code>git pull</code> in the app project "
        "and rebuild/redeploy it to see the changes.</p>"
        "<a href=\"/\">Back to the editor</a>",
    )


def validation_error_page(message: str) -> str:
    """400 page describing the first failing validation rule."""
    return _page(
        "Validation error",
        "<h1 class=\"error\">Validation error</h1>"
        f"<p>{escape(message)}</p>"
        "<p><a href=\"javascript:history.back()\">Go back</a> and fix the form.</p>",
    )


def conflict_page() -> str:
    """409 page asking the user to reload before resubmitting."""
    return _page(
        "Conflict",
        "<h1 class=\"conflict\">Conflict detected</h1>"
        "<p>The exercise file on GitHub has changed since you loaded this page.</p>"
        "<p>Please <a href=\"/\">reload the page</a> to get the latest version "
        "and enter your changes again.</p>",
    )


def server_error_page(message: str) -> str:
    """500 page surfacing the underlying error message."""
    return _page(
        "Error",
        "<h1 class=\"error\">Error while saving</h1>"
        "<p>The exercise could not be saved.</p>"
        f"<p><code>{escape(message)}</code></p>"
        "<a href=\"/\">Back to the editor</a>",
    )
