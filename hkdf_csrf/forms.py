"""
Presentation helpers for pages that reject a request with a bad token.

When validation fails, a page can offer the user a way to resend what
they submitted with a fresh token. These helpers rebuild the request URI
without the token field and render the posted parameters as hidden form
inputs. Request state is always passed in by the caller.

Parameter filtering is blacklist based by default. A whitelist is safer
but cannot be chosen generically, so it is left to the caller.
"""

import html
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode, urlsplit, urlunsplit

DEFAULT_FIELD_NAME = "csrftk"
DEFAULT_FORM_CLASS = "csrf_error"
DEFAULT_SUBMIT = (
    '<input type="submit" name="submit" value="Send posted data to server" />'
)

Params = Union[Mapping[str, object], Sequence[Tuple[str, object]]]


def _pairs(params: Params) -> List[Tuple[str, object]]:
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


def filter_params(
    params: Params,
    field_name: str = DEFAULT_FIELD_NAME,
    blacklist: Iterable[str] = (),
    whitelist: Optional[Iterable[str]] = None
) -> List[Tuple[str, object]]:
    """
    Drop the token field and unwanted parameters.

    Args:
        params: Query or form parameters (mapping or list of pairs)
        field_name: Token field name, always removed
        blacklist: Names to remove
        whitelist: If given, only these names are kept

    Returns:
        list: Remaining (name, value) pairs, order preserved
    """
    dropped = set(blacklist)
    dropped.add(field_name)
    allowed = set(whitelist) if whitelist is not None else None

    return [
        (name, value) for name, value in _pairs(params)
        if name not in dropped and (allowed is None or name in allowed)
    ]


def uri_without_token(
    request_uri: str,
    query: Params,
    field_name: str = DEFAULT_FIELD_NAME,
    blacklist: Iterable[str] = (),
    whitelist: Optional[Iterable[str]] = None
) -> str:
    """
    Rebuild the request URI without the token parameter.

    The query string of request_uri is ignored and replaced by the
    filtered `query` parameters. The scheme is dropped, so an absolute
    URI comes back scheme-relative ("//host/path").

    Args:
        request_uri: Raw request URI (path or absolute URI)
        query: Parsed query parameters; list values are repeated
        field_name: Token field name to strip
        blacklist: Additional parameter names to strip
        whitelist: If given, only these parameter names are kept

    Returns:
        str: URI safe to use as a form action or link target
    """
    parts = urlsplit(request_uri)
    kept = filter_params(query, field_name, blacklist, whitelist)
    return urlunsplit(("", parts.netloc, parts.path, urlencode(kept, doseq=True), parts.fragment))


def repost_form(
    post_params: Params,
    action: str,
    field_name: str = DEFAULT_FIELD_NAME,
    css_class: str = DEFAULT_FORM_CLASS,
    submit_html: Optional[str] = None,
    blacklist: Iterable[str] = (),
    whitelist: Optional[Iterable[str]] = None
) -> str:
    """
    Render a form that re-posts the submitted parameters.

    Names, values, action and class are HTML escaped. submit_html is
    inserted as-is and must be trusted markup.

    Args:
        post_params: Submitted form parameters
        action: Form action URI (see uri_without_token)
        field_name: Token field name, never echoed back
        css_class: Class attribute of the form element
        submit_html: Submit button markup (default: a plain submit input)
        blacklist: Additional parameter names not to echo back
        whitelist: If given, only these parameter names are echoed back

    Returns:
        str: HTML form, or "" when nothing was posted
    """
    if not post_params:
        return ""

    if submit_html is None:
        submit_html = DEFAULT_SUBMIT

    lines = [
        '<form method="post" action="%s" class="%s">'
        % (html.escape(action), html.escape(css_class))
    ]
    for name, value in filter_params(post_params, field_name, blacklist, whitelist):
        lines.append(
            '<input type="hidden" name="%s" value="%s" />'
            % (html.escape(str(name)), html.escape(str(value)))
        )
    lines.append(submit_html)
    lines.append("</form>")
    return "\n".join(lines) + "\n"
