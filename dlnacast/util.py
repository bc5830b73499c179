import logging
from xml.sax.saxutils import escape

from requests.compat import urljoin


XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def _getLogger(name):
    """
    Retrieve a logger instance.
    """
    return logging.getLogger(name)


def escape_xml(text):
    """
    Escape `&`, `<`, `>`, `"` and `'` for use inside an XML text node.
    """
    return escape(text, XML_ENTITIES)


def extract_tag(xml, tag):
    """
    Return the stripped text between the first `<tag>` and the first `</tag>`
    in `xml`, or None. This is a plain substring search: attributes,
    namespaces and nesting are not understood.
    """
    start_tag = "<%s>" % tag
    end_tag = "</%s>" % tag
    start = xml.find(start_tag)
    end = xml.find(end_tag)
    if start >= 0 and end > start:
        return xml[start + len(start_tag):end].strip()
    return None


def has_scheme(url):
    scheme, sep, _ = url.partition("://")
    return bool(sep) and scheme.isalpha()


def resolve_url(location, url):
    """
    Resolve `url` against the directory of `location` (everything up to and
    including its last '/'). Absolute URLs are returned unchanged.
    """
    if has_scheme(url):
        return url
    return urljoin(location[:location.rindex("/") + 1], url)
