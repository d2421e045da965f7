import re

_PROTOCOL = re.compile(r":/")
_REPEATED_SLASHES = re.compile(r"(?<=[^:\s])/{2,}")
_SLASH_BEFORE_QUERY = re.compile(r"/(\?|&|#[^!])")
_SECOND_QUESTION_MARK = re.compile(r"(\?.+)\?")
_SLASH_JSON = re.compile(r"/\.json", re.IGNORECASE)
_LEADING_SLASHES = re.compile(r"^/{2,}")
_TRAILING_EXTENSION = re.compile(r"/\.\w*$")


def join_uri_paths(*paths: str) -> str:
    """Join URI paths into one single string.

    Empty segments are skipped, repeated slashes are collapsed (the ones after
    a protocol excepted), the result never starts with two or more slashes and
    never ends in ``/.extension``.

    Examples:
        >>> join_uri_paths("https://example.com", "/api/v1/webhooks")
        'https://example.com/api/v1/webhooks'
        >>> join_uri_paths("/api/v1/webhooks", ".json")
        '/api/v1/webhooks.json'
    """
    path = "/".join(segment for segment in paths if segment)

    path = _PROTOCOL.sub("://", path)
    path = _REPEATED_SLASHES.sub("/", path)
    path = _SLASH_BEFORE_QUERY.sub(r"\1", path)
    path = _SECOND_QUESTION_MARK.sub(r"\1&", path)
    path = _SLASH_JSON.sub(".json", path)
    path = _LEADING_SLASHES.sub("/", path)

    if _TRAILING_EXTENSION.search(path):
        index = path.rindex("/")
        path = path[:index] + path[index + 1 :]

    return path
